"""
Data normalization modules for OnCall Directory.

Handles standardization of provider names and phone numbers, plus
configuration loading shared by the other components.
"""
