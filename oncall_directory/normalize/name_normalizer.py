"""
Name normalization for OnCall Directory.

Folds provider names and search queries into a comparable form:
canonically decomposed, diacritics stripped, lower-cased and trimmed.
"""

import logging
import unicodedata
from typing import Dict, Optional
import pandas as pd
import regex

logger = logging.getLogger(__name__)

# Unicode Diacritic property: combining accents plus spacing marks such as ` ^ ´ ¨
_DIACRITIC_PATTERN = regex.compile(r'\p{Diacritic}')


def normalize(text) -> str:
    """
    Normalize a name or query for matching.

    Lower-casing happens before decomposition so that characters whose
    lower-case form carries a combining mark (e.g. U+0130) are folded in
    a single pass. Every character with a non-zero combining class is
    dropped along with the Diacritic ones, so the result is already in
    NFD and the function is idempotent.

    Args:
        text: Raw name or query

    Returns:
        Normalized text, or "" for missing/non-string input
    """
    if not isinstance(text, str):
        return ""

    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = _DIACRITIC_PATTERN.sub('', decomposed)
    stripped = "".join(ch for ch in stripped if not unicodedata.combining(ch))
    return stripped.strip()


class NameNormalizer:
    """
    Normalizes provider name columns of directory and schedule tables.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize name normalizer.

        Args:
            config: Optional configuration dictionary
        """
        self.config = config or {}
        logger.info("Initialized NameNormalizer")

    def normalize_name(self, name) -> str:
        """
        Normalize a single provider name.

        Args:
            name: Raw provider name

        Returns:
            Normalized name
        """
        return normalize(name)

    def normalize_dataframe(self, df: pd.DataFrame,
                            name_column: str = "provider_name") -> pd.DataFrame:
        """
        Add a normalized name column to a DataFrame.

        Args:
            df: Input DataFrame
            name_column: Column with provider names

        Returns:
            Copy of the DataFrame with a `<name_column>_norm` column
        """
        result_df = df.copy()

        if name_column not in df.columns:
            logger.warning(f"Column {name_column} not found, skipping name normalization")
            return result_df

        result_df[f"{name_column}_norm"] = df[name_column].apply(self.normalize_name)

        logger.info(f"Normalized names for {len(result_df)} records")
        return result_df
