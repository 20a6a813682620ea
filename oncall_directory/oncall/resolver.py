"""
On-call resolution for OnCall Directory.

Looks up the provider scheduled for a date, specialty and optional
healthcare plan, then enriches the schedule record with phone numbers
from the provider directory: the provider's own phone, a second phone
(PA phone or residency line) and the phone of a covering provider.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
import pandas as pd

from oncall_directory.normalize.config import SECOND_PHONE_PREFERENCES, get_default_config
from oncall_directory.oncall.dates import effective_on_call_date, to_ymd

logger = logging.getLogger(__name__)

_PA_PATTERN = re.compile(r'PA', re.IGNORECASE)
_RESIDENCY_PATTERN = re.compile(r'Residency', re.IGNORECASE)


def _clean_value(value: Any) -> Any:
    """Convert pandas missing values to None."""
    if isinstance(value, (list, dict)):
        return value
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if hasattr(value, "item"):
        # numpy scalars
        return value.item()
    return value


def second_phone_label(source: Optional[str]) -> str:
    """
    Get the display label for a second phone source.

    Args:
        source: Source recorded by the lookup ("PA Phone", "Residency" or None)

    Returns:
        "PA", "Resident" or "Resident/PA"
    """
    if not source:
        return "Resident/PA"
    if _PA_PATTERN.search(source):
        return "PA"
    if _RESIDENCY_PATTERN.search(source):
        return "Resident"
    return "Resident/PA"


class OnCallResolver:
    """
    Resolves on-call providers from schedule and directory tables.
    """

    def __init__(self, schedules_df: pd.DataFrame, directory_df: pd.DataFrame,
                 config: Optional[Dict] = None):
        """
        Initialize resolver with schedule and directory data.

        Args:
            schedules_df: Schedule records (on_call_date, specialty, healthcare_plan,
                provider_name, cover, covering_provider)
            directory_df: Directory records (provider_name, specialty, phone_number)
            config: Full configuration dictionary (uses `oncall`)
        """
        self.schedules_df = schedules_df
        self.directory_df = directory_df

        self.config = config or get_default_config()
        oncall_defaults = get_default_config()["oncall"]
        oncall_config = self.config.get("oncall", {})

        self.default_preference = oncall_config.get(
            "second_phone_preference", oncall_defaults["second_phone_preference"]
        )
        self.pa_phone_marker = oncall_config.get("pa_phone_marker", oncall_defaults["pa_phone_marker"])
        self.residency_marker = oncall_config.get("residency_marker", oncall_defaults["residency_marker"])
        self.day_start_hour = oncall_config.get("day_start_hour", oncall_defaults["day_start_hour"])

        logger.info(f"Initialized OnCallResolver with {len(schedules_df)} schedule "
                    f"and {len(directory_df)} directory records")

    def on_call_date_for(self, moment: datetime) -> str:
        """Get the YYYY-MM-DD on-call date a local moment belongs to."""
        return to_ymd(effective_on_call_date(moment, self.day_start_hour))

    def find_schedule(self, date: str, specialty: str,
                      plan: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Find the schedule record for a date and specialty.

        Without a plan only records with no healthcare plan match.

        Args:
            date: On-call date (YYYY-MM-DD)
            specialty: Specialty name
            plan: Healthcare plan

        Returns:
            First matching schedule record, or None
        """
        df = self.schedules_df
        mask = (df["on_call_date"].astype(str) == str(date)) & (df["specialty"] == specialty)

        if "healthcare_plan" in df.columns:
            if plan:
                mask &= df["healthcare_plan"] == plan
            else:
                mask &= df["healthcare_plan"].isna()
        elif plan:
            return None

        matches = df[mask]
        if matches.empty:
            return None

        return {key: _clean_value(value) for key, value in matches.iloc[0].to_dict().items()}

    def find_phone(self, provider_name: Optional[str]) -> Optional[str]:
        """
        Get the directory phone for a provider name.

        Args:
            provider_name: Exact provider name

        Returns:
            Phone number of the first matching directory record, or None
        """
        if not provider_name:
            return None

        matches = self.directory_df[self.directory_df["provider_name"] == provider_name]
        if matches.empty:
            return None

        return _clean_value(matches.iloc[0]["phone_number"]) or None

    def _find_marker_phone(self, marker: str, specialty: str) -> Optional[str]:
        """Get the phone of the first directory entry named like `marker` in a specialty."""
        df = self.directory_df
        mask = (
            df["provider_name"].str.contains(marker, case=False, regex=False, na=False)
            & (df["specialty"] == specialty)
        )
        matches = df[mask]
        if matches.empty:
            return None

        return _clean_value(matches.iloc[0]["phone_number"]) or None

    def find_second_phone(self, specialty: str,
                          preference: str = "auto") -> Tuple[Optional[str], Optional[str]]:
        """
        Find a second contact phone for a specialty.

        The PA phone is tried first for "pa" and "auto"; the residency
        line is tried for "residency" and for "auto" when no PA phone exists.

        Args:
            specialty: Specialty name
            preference: "pa", "residency" or "auto"

        Returns:
            Tuple of (phone, source)
        """
        if preference not in SECOND_PHONE_PREFERENCES:
            raise ValueError(f"Unsupported second phone preference: {preference}")

        if preference in ("pa", "auto"):
            phone = self._find_marker_phone(self.pa_phone_marker, specialty)
            if phone:
                return phone, "PA Phone"

        if preference in ("residency", "auto"):
            phone = self._find_marker_phone(self.residency_marker, specialty)
            if phone:
                return phone, "Residency"

        return None, None

    def lookup(self, date: str, specialty: str, plan: Optional[str] = None,
               include_second_phone: bool = False,
               second_phone_pref: Optional[str] = None,
               include_cover: bool = False) -> Optional[Dict[str, Any]]:
        """
        Look up the on-call provider with phone numbers.

        Args:
            date: On-call date (YYYY-MM-DD)
            specialty: Specialty name
            plan: Healthcare plan (records without a plan match when omitted)
            include_second_phone: Whether to resolve a second phone
            second_phone_pref: "pa", "residency" or "auto"
            include_cover: Whether to resolve the covering provider's phone

        Returns:
            Schedule record enriched with phone fields, or None if nobody is scheduled
        """
        if not date or not specialty:
            raise ValueError("Missing required parameters: date and specialty")

        preference = second_phone_pref or self.default_preference
        if preference not in SECOND_PHONE_PREFERENCES:
            raise ValueError(f"Unsupported second phone preference: {preference}")

        record = self.find_schedule(date, specialty, plan)
        if record is None:
            logger.info(f"No provider found for {specialty} on {date}")
            return None

        phone_number = self.find_phone(record.get("provider_name"))

        second_phone, second_phone_source = None, None
        if include_second_phone:
            second_phone, second_phone_source = self.find_second_phone(specialty, preference)

        cover_phone, cover_provider_name = None, None
        covering_provider = record.get("covering_provider")
        if include_cover and record.get("cover") and covering_provider:
            cover_phone = self.find_phone(covering_provider)
            if cover_phone:
                cover_provider_name = covering_provider

        result = dict(record)
        result.update({
            "phone_number": phone_number,
            "second_phone": second_phone,
            "second_phone_source": second_phone_source,
            "cover_phone": cover_phone,
            "cover_provider_name": cover_provider_name
        })

        logger.info(f"Resolved on-call provider for {specialty} on {date}")
        return result
