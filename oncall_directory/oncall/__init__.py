"""
On-call lookup for OnCall Directory.

Resolves the scheduled provider for a date and specialty together with
their directory phone, second phone and cover provider.
"""
