"""
Matching engine for OnCall Directory.

Implements rule-based relevance scoring of provider names against
free-text search queries.
"""
