"""safesave subcommands."""
