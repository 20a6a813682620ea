"""
Provider search for OnCall Directory.

Ranks provider names for type-ahead suggestion lists and filters
directory tables the way the directory listing does (exact name,
exact specialty, case-insensitive substring).
"""

import logging
from typing import Dict, Iterable, List, Optional
import pandas as pd

from oncall_directory.match.name_matcher import NameMatcher
from oncall_directory.normalize.config import get_default_config
from oncall_directory.normalize.name_normalizer import normalize

logger = logging.getLogger(__name__)


class ProviderSearch:
    """
    Ranks and filters directory providers by name.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize provider search with configuration.

        Args:
            config: Full configuration dictionary (uses `matching` and `search`)
        """
        self.config = config or get_default_config()
        search_defaults = get_default_config()["search"]
        search_config = self.config.get("search", {})

        self.max_results = search_config.get("max_results", search_defaults["max_results"])
        self.empty_query_limit = search_config.get("empty_query_limit", search_defaults["empty_query_limit"])
        self.suggestion_limit = search_config.get("suggestion_limit", search_defaults["suggestion_limit"])

        self.matcher = NameMatcher(self.config.get("matching", {}))

        logger.info("Initialized ProviderSearch")

    def rank_names(self, names: Iterable[str], query: str,
                   limit: Optional[int] = None) -> List[str]:
        """
        Rank provider names by closeness to a query.

        A blank query returns the first `empty_query_limit` names in
        their original order. Otherwise names scoring 0 are dropped and
        the rest are sorted by descending score, ties kept in input order.

        Args:
            names: Candidate provider names
            query: User-typed search text
            limit: Maximum number of names to return (defaults to `max_results`)

        Returns:
            Ranked list of names
        """
        names = list(names)
        if not normalize(query):
            return names[:self.empty_query_limit]

        limit = self.max_results if limit is None else limit
        normalized_query = normalize(query)

        scored = [
            (self.matcher.score_normalized(normalize(name), normalized_query), name)
            for name in names
        ]
        scored = [item for item in scored if item[0] > 0]

        # sorted() is stable, so equal scores stay in input order
        scored = sorted(scored, key=lambda item: item[0], reverse=True)

        logger.debug(f"Ranked {len(scored)} of {len(names)} names for query '{query}'")
        return [name for _, name in scored[:limit]]

    def suggest(self, names: Iterable[str], query: str) -> List[str]:
        """
        Rank names for a short suggestion dropdown.

        A blank query lists every name, uncapped, in input order.
        """
        names = list(names)
        if not normalize(query):
            return names
        return self.rank_names(names, query, limit=self.suggestion_limit)

    def rank_providers(self, df: pd.DataFrame, query: str,
                       name_column: str = "provider_name",
                       limit: Optional[int] = None) -> pd.DataFrame:
        """
        Rank directory records by closeness of their name to a query.

        Args:
            df: Directory DataFrame
            query: User-typed search text
            name_column: Column holding provider names
            limit: Maximum number of rows to return (defaults to `max_results`)

        Returns:
            DataFrame with a `match_score` column, best matches first
        """
        if name_column not in df.columns:
            raise ValueError(f"Column {name_column} not found in directory data")

        if not normalize(query):
            result_df = df.head(self.empty_query_limit).copy()
            result_df["match_score"] = 0
            return result_df

        limit = self.max_results if limit is None else limit
        normalized_query = normalize(query)

        result_df = df.copy()
        result_df["match_score"] = [
            self.matcher.score_normalized(normalize(name), normalized_query)
            for name in df[name_column]
        ]
        result_df = result_df[result_df["match_score"] > 0]
        result_df = result_df.sort_values("match_score", ascending=False, kind="mergesort")

        logger.info(f"Ranked {len(result_df)} of {len(df)} providers for query '{query}'")
        return result_df.head(limit)

    def search_directory(self, df: pd.DataFrame,
                         search: Optional[str] = None,
                         specialty: Optional[str] = None,
                         provider_name: Optional[str] = None) -> pd.DataFrame:
        """
        Filter directory records.

        All given filters must hold: exact provider name, exact specialty
        (empty or "all" disables it) and a case-insensitive substring match
        of `search` on the provider name.

        Args:
            df: Directory DataFrame
            search: Substring to look for in provider names
            specialty: Specialty to keep
            provider_name: Exact provider name to keep

        Returns:
            Filtered DataFrame
        """
        mask = pd.Series(True, index=df.index)

        if provider_name:
            mask &= df["provider_name"] == provider_name

        if specialty and specialty != "all":
            mask &= df["specialty"] == specialty

        if search and search.strip():
            mask &= df["provider_name"].str.contains(
                search.strip(), case=False, regex=False, na=False
            )

        result_df = df[mask]
        logger.info(f"Directory search matched {len(result_df)} of {len(df)} records")
        return result_df


def rank_provider_names(names: Iterable[str], query: str, config: Optional[Dict] = None,
                        limit: Optional[int] = None) -> List[str]:
    """
    Convenience function to rank provider names against a query.

    Args:
        names: Candidate provider names
        query: User-typed search text
        config: Configuration dictionary
        limit: Maximum number of names to return

    Returns:
        Ranked list of names
    """
    return ProviderSearch(config).rank_names(names, query, limit=limit)
