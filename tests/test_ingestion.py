"""Tests for src.data_pipeline.ingestion."""

import math

import pandas as pd
import pytest

from src.data_pipeline.ingestion import DashboardIngester, IngestionError, _parse_numeric


# ── Numeric parsing ───────────────────────────────────────────────────


class TestParseNumeric:
    def test_plain_number(self):
        assert _parse_numeric("88") == 88.0

    def test_comma_formatted(self):
        assert _parse_numeric("25,000") == 25000.0

    def test_percent_suffix(self):
        assert _parse_numeric("92%") == 92.0

    def test_quoted(self):
        assert _parse_numeric('"45"') == 45.0

    def test_already_numeric(self):
        assert _parse_numeric(7) == 7.0

    def test_blank_is_nan(self):
        assert math.isnan(_parse_numeric("  "))

    def test_garbage_is_nan(self):
        assert math.isnan(_parse_numeric("n/a"))

    def test_nan_passthrough(self):
        assert pd.isna(_parse_numeric(float("nan")))


# ── File reading ──────────────────────────────────────────────────────


class TestDashboardIngester:
    def test_read_employees(self, data_dir):
        df = DashboardIngester(data_dir).read_employees()

        assert len(df) == 6, "blank placeholder row should be dropped"
        assert df.loc[0, "Name"] == "Sarah J."
        assert list(df.columns) == [
            "Name", "Role", "completionRate", "onTimeRate", "budgetRate", "Fatigue",
        ]

    def test_read_machines(self, data_dir):
        df = DashboardIngester(data_dir).read_machines()
        assert len(df) == 3
        assert df["Machine"].tolist() == [
            "Server Cluster A", "Assembly Line 1", "Delivery Truck 4",
        ]

    def test_read_sales(self, data_dir):
        series = DashboardIngester(data_dir).read_sales()
        assert series == [12000.0, 15000.0, 11000.0, 20000.0, 23000.0, 25000.0]

    def test_read_sales_falls_back_to_last_column(self, tmp_path):
        (tmp_path / "sales.csv").write_text("period,revenue\n1,100\n2,200\n")
        assert DashboardIngester(tmp_path).read_sales() == [100.0, 200.0]

    def test_placeholder_text_is_kept(self, tmp_path):
        (tmp_path / "employees.csv").write_text("name,fatigue\nMike R.,n/a\nTom W.,\n")
        df = DashboardIngester(tmp_path).read_employees()
        assert df.loc[0, "fatigue"] == "n/a"
        assert pd.isna(df.loc[1, "fatigue"])

    @pytest.mark.parametrize("cell", ["inf", "-inf", "Infinity"])
    def test_read_sales_rejects_infinite(self, tmp_path, cell):
        (tmp_path / "sales.csv").write_text(f"month,sales\nJan,100\nFeb,{cell}\n")
        with pytest.raises(ValueError, match="position 1 is not finite"):
            DashboardIngester(tmp_path).read_sales()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="employees.csv"):
            DashboardIngester(tmp_path).read_employees()

    def test_read_all(self, data_dir):
        data = DashboardIngester(data_dir).read_all()
        assert set(data) == {"employees", "machines", "sales"}

    def test_read_all_wraps_errors(self, data_dir):
        (data_dir / "machines.csv").unlink()
        with pytest.raises(IngestionError, match="machines.csv"):
            DashboardIngester(data_dir).read_all()
