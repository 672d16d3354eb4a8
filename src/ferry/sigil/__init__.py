"""
Sigil - Signing identity for ferry.

The signing key is never generated or stored here; it comes from
ACCOUNT_PRIVATE_KEY in the loaded env file.
"""
