"""
Table loading for OnCall Directory.

Reads directory and schedule tables from local files into pandas
DataFrames and checks that the columns the lookups rely on are present.
"""

import logging
from pathlib import Path
from typing import List, Optional
import pandas as pd

logger = logging.getLogger(__name__)

DIRECTORY_COLUMNS = ["provider_name", "specialty", "phone_number"]
SCHEDULE_COLUMNS = ["on_call_date", "specialty", "provider_name"]

# Columns kept as text so phone numbers and dates are not coerced
TEXT_COLUMNS = ["provider_name", "specialty", "phone_number", "on_call_date",
                "healthcare_plan", "covering_provider"]


def validate_columns(df: pd.DataFrame, required_columns: List[str], table_name: str = "table"):
    """
    Check that a DataFrame has the required columns.

    Args:
        df: Loaded DataFrame
        required_columns: Column names that must exist
        table_name: Name used in the error message

    Raises:
        ValueError: If any required column is missing
    """
    missing = [column for column in required_columns if column not in df.columns]
    if missing:
        raise ValueError(f"{table_name} is missing required columns: {', '.join(missing)}")


def load_table(input_path: str, required_columns: Optional[List[str]] = None,
               table_name: str = "table") -> pd.DataFrame:
    """
    Load a table from a CSV, Parquet or JSON-lines file.

    Args:
        input_path: Path to input file
        required_columns: Column names that must exist
        table_name: Name used in log and error messages

    Returns:
        Loaded DataFrame
    """
    path = Path(input_path)

    if path.suffix == ".csv":
        header = pd.read_csv(path, nrows=0)
        dtypes = {column: str for column in header.columns if column in TEXT_COLUMNS}
        df = pd.read_csv(path, dtype=dtypes)
    elif path.suffix == ".parquet":
        df = pd.read_parquet(path)
    elif path.suffix in (".json", ".jsonl"):
        df = pd.read_json(path, lines=True, dtype=False)
    else:
        raise ValueError(f"Unsupported file format: {input_path}")

    if required_columns:
        validate_columns(df, required_columns, table_name)

    logger.info(f"Loaded {len(df)} {table_name} records from {input_path}")
    return df


def load_directory(input_path: str) -> pd.DataFrame:
    """Load provider directory records."""
    return load_table(input_path, DIRECTORY_COLUMNS, "directory")


def load_schedules(input_path: str) -> pd.DataFrame:
    """Load on-call schedule records."""
    return load_table(input_path, SCHEDULE_COLUMNS, "schedules")
