"""
Unit tests for provider search.
"""

import pytest
import pandas as pd
import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from oncall_directory.normalize.config import get_default_config, merge_configs
from oncall_directory.search.provider_search import ProviderSearch, rank_provider_names


class TestProviderSearch:
    """Test cases for provider ranking and filtering."""

    def setup_method(self):
        """Setup test fixtures."""
        self.search = ProviderSearch()
        self.names = [
            "Peter Smith",
            "Mary Johnson",
            "Johnson",
            "Jonson",
            "Johnsonville",
        ]
        self.directory_df = pd.DataFrame({
            "provider_name": [
                "Mary Johnson", "Johnson", "Ana Lopez", "Cardiology PA Phone", "Peter Smith"
            ],
            "specialty": ["Cardiology", "Neurology", "Cardiology", "Cardiology", "Neurology"],
            "phone_number": ["7875550101", "7875550102", "7875550103", "7875550104", "7875550105"]
        })

    def test_rank_names(self):
        """Test ranking by descending score."""
        ranked = self.search.rank_names(self.names, "johnson")
        assert ranked == ["Johnson", "Johnsonville", "Mary Johnson", "Jonson", "Peter Smith"]

    def test_rank_names_limit(self):
        """Test truncation of ranked names."""
        assert self.search.rank_names(self.names, "johnson", limit=2) == ["Johnson", "Johnsonville"]

    def test_rank_names_blank_query(self):
        """Test that a blank query keeps the original order."""
        assert self.search.rank_names(self.names, "  ") == self.names

        search = ProviderSearch(merge_configs(get_default_config(), {"search": {"empty_query_limit": 2}}))
        assert search.rank_names(self.names, "") == self.names[:2]

    def test_rank_names_stable_ties(self):
        """Test that equal scores keep input order."""
        names = ["Ann Bell", "Ann Bolt", "Ann Bird"]
        ranked = self.search.rank_names(names, "ann")
        assert ranked == names

    def test_rank_names_drops_zero_scores(self):
        """Test that non-matching names are excluded."""
        search = ProviderSearch(merge_configs(get_default_config(), {
            "matching": {"bonuses": {"shortness": 0}}
        }))
        assert search.rank_names(self.names, "johnson") == [
            "Johnson", "Johnsonville", "Mary Johnson", "Jonson"
        ]

    def test_suggest(self):
        """Test the suggestion limit."""
        names = [f"Provider {i}" for i in range(30)]
        assert len(self.search.suggest(names, "provider")) == 8

    def test_suggest_blank_query_lists_all(self):
        """Test that a blank query shows every name, past the empty-query limit."""
        names = [f"Provider {i}" for i in range(60)]
        assert self.search.suggest(names, "") == names
        assert self.search.suggest(iter(names), "   ") == names

    def test_rank_providers(self):
        """Test ranking of directory records."""
        result_df = self.search.rank_providers(self.directory_df, "johnson")

        assert "match_score" in result_df.columns
        assert result_df["provider_name"].tolist()[:2] == ["Johnson", "Mary Johnson"]
        assert result_df["match_score"].is_monotonic_decreasing

    def test_rank_providers_missing_column(self):
        """Test that an unknown name column is rejected."""
        with pytest.raises(ValueError):
            self.search.rank_providers(self.directory_df, "johnson", name_column="name")

    def test_search_directory(self):
        """Test substring, specialty and exact-name filters."""
        result_df = self.search.search_directory(self.directory_df, search="JOHN")
        assert result_df["provider_name"].tolist() == ["Mary Johnson", "Johnson"]

        result_df = self.search.search_directory(self.directory_df, search="john", specialty="Cardiology")
        assert result_df["provider_name"].tolist() == ["Mary Johnson"]

        result_df = self.search.search_directory(self.directory_df, specialty="all")
        assert len(result_df) == len(self.directory_df)

        result_df = self.search.search_directory(self.directory_df, provider_name="Ana Lopez")
        assert result_df["phone_number"].tolist() == ["7875550103"]

    def test_rank_provider_names_convenience(self):
        """Test the module-level ranking function."""
        assert rank_provider_names(self.names, "mary")[0] == "Mary Johnson"
