"""Data cleaning for dashboard CSV exports.

Handles standardization across the employee and machine files:
- Normalize headers (onTimeRate / "On Time Rate" -> on_time_rate)
- Normalize display names for consistent lookup
- Parse metric columns as floats
- Build validated Entity objects (range checks happen here, at ingestion)
"""

import logging
import re
from typing import Optional

import pandas as pd

from src.data_pipeline.config import (
    COLUMN_ALIASES,
    EMPLOYEE_METRIC_COLUMNS,
    MACHINE_METRIC_COLUMNS,
)
from src.data_pipeline.ingestion import _parse_numeric
from src.scoring_engine.errors import MetricRangeError
from src.scoring_engine.models import Entity

logger = logging.getLogger(__name__)

# Lower/digit followed by upper: the boundary of a camelCase word
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_WORD = re.compile(r"[^0-9a-zA-Z]+")


def _is_blank(value) -> bool:
    """True for missing cells and cells holding only quotes/whitespace."""
    if pd.isna(value):
        return True
    return str(value).strip().strip('"').strip() == ""


class DataCleaner:
    """Cleans and standardizes dashboard exports."""

    # ------------------------------------------------------------------
    # Header / name helpers
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_column_name(column: str) -> str:
        """Convert a header to snake_case and apply aliases.

        Examples:
            "onTimeRate"    -> "on_time_rate"
            "On Time Rate"  -> "on_time_rate"
            "budget-rate"   -> "budget_rate"
            "Type"          -> "role"
        """
        s = _CAMEL_BOUNDARY.sub("_", str(column).strip())
        s = _NON_WORD.sub("_", s).strip("_").lower()
        return COLUMN_ALIASES.get(s, s)

    @staticmethod
    def normalize_name(name: str) -> Optional[str]:
        """Normalize a display name.

        - Strips quotes and extra whitespace
        - Standardizes apostrophes and hyphens
        Returns None for missing / blank values.
        """
        if pd.isna(name):
            return None

        name = str(name).strip().strip('"')
        if name == "":
            return None

        name = name.replace("\u2019", "'").replace("\u2018", "'")
        name = name.replace("\u2013", "-").replace("\u2014", "-")

        return " ".join(name.split())

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def _clean_frame(self, df: pd.DataFrame, metric_columns: list[str]) -> pd.DataFrame:
        out = df.copy()
        out.columns = [self.normalize_column_name(c) for c in out.columns]

        if "name" not in out.columns:
            raise ValueError(f"Missing required 'name' column; got {list(out.columns)}")
        if "role" not in out.columns:
            out["role"] = ""

        out["name"] = out["name"].apply(self.normalize_name)
        dropped = out["name"].isna()
        if dropped.any():
            logger.warning("Dropping %d rows with no name", int(dropped.sum()))
        out = out[~dropped].reset_index(drop=True)

        out["role"] = out["role"].fillna("").astype(str).str.strip()

        for col in metric_columns:
            if col in out.columns:
                parsed = out[col].apply(_parse_numeric)
                garbled = parsed.isna() & ~out[col].apply(_is_blank).astype(bool)
                if garbled.any():
                    idx = garbled.idxmax()
                    raise MetricRangeError(
                        f"Row {idx}: metric {col!r} for {out.at[idx, 'name']!r} "
                        f"must be numeric, got {out.at[idx, col]!r}"
                    )
                out[col] = parsed
        return out

    def clean_employees(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean the employee DataFrame. Normalizes headers, names and metrics.

        Raises:
            MetricRangeError: If a non-blank metric cell is not a number.
        """
        out = self._clean_frame(df, EMPLOYEE_METRIC_COLUMNS)
        logger.info("Cleaned employees: %d rows", len(out))
        return out

    def clean_machines(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean the machine DataFrame. Normalizes headers, names and health.

        Raises:
            MetricRangeError: If a non-blank health cell is not a number.
        """
        out = self._clean_frame(df, MACHINE_METRIC_COLUMNS)
        logger.info("Cleaned machines: %d rows", len(out))
        return out

    def clean_all(self, data: dict) -> dict:
        """Clean the dict returned by DashboardIngester.read_all().

        The sales series passes through unchanged.
        """
        return {
            "employees": self.clean_employees(data["employees"]),
            "machines": self.clean_machines(data["machines"]),
            "sales": list(data["sales"]),
        }

    # ------------------------------------------------------------------
    # Entity construction
    # ------------------------------------------------------------------
    @staticmethod
    def records_to_entities(df: pd.DataFrame, metric_columns: list[str]) -> list[Entity]:
        """Build validated entities from a cleaned DataFrame.

        Blank metric cells are left off the entity. Present values must lie
        in [0, 100].

        Raises:
            MetricRangeError: naming the offending row when a value is out
                of range.
        """
        entities = []
        present = [c for c in metric_columns if c in df.columns]
        for idx, row in df.iterrows():
            metrics = {}
            for col in present:
                value = row[col]
                if pd.isna(value):
                    continue
                metrics[col] = value
            try:
                entities.append(Entity.from_record(row["name"], row["role"], metrics))
            except MetricRangeError as e:
                raise MetricRangeError(f"Row {idx}: {e}") from e
        return entities
