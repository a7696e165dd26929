"""CSV ingestion for dashboard data exports.

Handles the quirks of hand-maintained spreadsheet exports:
- Quoted values and stray whitespace
- Percent-suffixed numbers (e.g., "88%")
- Comma-formatted numbers (e.g., "25,000")
- Blank placeholder rows
"""

import logging
import math
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import FILE_NAMES

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when CSV ingestion fails."""


def _parse_numeric(value):
    """Parse a numeric string that may carry commas or a percent sign.

    '25,000' -> 25000.0, '88%' -> 88.0, '' -> nan
    """
    if pd.isna(value):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).replace(",", "").strip().strip('"').rstrip("%").strip()
    if s == "":
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


def _strip_quotes(value):
    if isinstance(value, str):
        return value.strip().strip('"').strip()
    return value


class DashboardIngester:
    """Reads the employee, machine and sales CSV exports.

    Each read method returns a pandas DataFrame with:
    - String values stripped of quotes and whitespace
    - Fully blank rows removed
    Header names are left as exported; :class:`DataCleaner` normalizes them.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _resolve_path(self, file_key: str) -> Path:
        """Build the full file path for a given file key, raising if missing."""
        filepath = self.data_dir / FILE_NAMES[file_key]
        if not filepath.exists():
            raise FileNotFoundError(
                f"Expected file not found: {filepath}"
            )
        return filepath

    def _read_csv(self, file_key: str) -> pd.DataFrame:
        filepath = self._resolve_path(file_key)
        logger.info("Reading %s: %s", file_key, filepath.name)

        # Only empty cells are missing; placeholders like "n/a" reach validation
        df = pd.read_csv(
            filepath,
            quotechar='"',
            skipinitialspace=True,
            keep_default_na=False,
            na_values=[""],
        )
        df.columns = [str(c).strip().strip('"') for c in df.columns]

        # Strip surrounding quotes from string values
        for col in df.columns:
            if not pd.api.types.is_numeric_dtype(df[col]):
                df[col] = df[col].map(_strip_quotes)

        df = df.dropna(how="all").reset_index(drop=True)
        return df

    # ------------------------------------------------------------------
    # Employees / machines
    # ------------------------------------------------------------------
    def read_employees(self) -> pd.DataFrame:
        """Read the employee roster.

        Expected columns (any casing/spacing): name, role, completionRate,
        onTimeRate, budgetRate, fatigue.
        """
        df = self._read_csv("employees")
        logger.info("Loaded %d employee rows", len(df))
        return df

    def read_machines(self) -> pd.DataFrame:
        """Read the machine/asset list.

        Expected columns: name, type, health.
        """
        df = self._read_csv("machines")
        logger.info("Loaded %d machine rows", len(df))
        return df

    # ------------------------------------------------------------------
    # Sales
    # ------------------------------------------------------------------
    def read_sales(self) -> list[float]:
        """Read the sales series, oldest first.

        Uses the ``sales`` column when present, otherwise the last column.
        Unparseable cells are skipped.

        Raises:
            ValueError: If a value is infinite.
        """
        df = self._read_csv("sales")
        lowered = {c.lower(): c for c in df.columns}
        col = lowered.get("sales", df.columns[-1])

        values = df[col].apply(_parse_numeric).dropna()
        series = [float(v) for v in values]
        for position, value in enumerate(series):
            if not math.isfinite(value):
                raise ValueError(
                    f"Sales value at position {position} is not finite: {value!r}"
                )
        logger.info("Loaded %d sales periods", len(series))
        return series

    def read_all(self) -> dict:
        """Read all three files and return them as a dict.

        Returns:
            dict with keys: 'employees', 'machines', 'sales'

        Raises:
            IngestionError: if any file cannot be read.
        """
        try:
            return {
                "employees": self.read_employees(),
                "machines": self.read_machines(),
                "sales": self.read_sales(),
            }
        except Exception as e:
            raise IngestionError(f"Failed to read CSV files: {e}") from e
