"""
Provider search for OnCall Directory.

Ranks and filters directory records by provider name.
"""
