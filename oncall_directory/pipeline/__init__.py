"""
Command-line entry points for OnCall Directory.
"""
