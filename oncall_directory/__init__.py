"""
OnCall Directory - Hospital On-Call Provider Directory Toolkit

Ranks provider names against free-text queries and resolves on-call
providers, second phones and cover providers from directory and
schedule tables.
"""

__version__ = "1.0.0"
__author__ = "OnCall Directory Team"
