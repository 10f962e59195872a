"""
safesave CLI - Signed Save Snapshots

Commands:
- safesave export - Sign a snapshot into an envelope
- safesave verify - Verify an envelope and recover its snapshot
- safesave inspect - Show counts and fingerprint of a snapshot or envelope
"""

__version__ = "0.1.0"
