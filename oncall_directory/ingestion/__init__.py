"""
Data ingestion for OnCall Directory.
"""
