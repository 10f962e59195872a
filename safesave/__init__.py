"""
Signed Save Snapshots

Tamper detection for exported game progress: deterministic key derivation,
canonical serialization, HMAC signing and a gated import protocol.
"""

__version__ = "0.1.0"
