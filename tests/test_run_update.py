"""Tests for src.data_pipeline.run_update (full pipeline integration)."""

import json

import pytest

from src.data_pipeline.config import REPORT_FILENAME
from src.data_pipeline.ingestion import IngestionError
from src.data_pipeline.run_update import run_pipeline
from src.scoring_engine.errors import InvalidInputError, MetricRangeError

_REQUIRED_ENTITY_KEYS = {
    "name", "role", "metrics", "composite_score", "forecast_score", "risk_level",
}


# ── Pipeline execution ────────────────────────────────────────────────


class TestRunPipeline:
    """End-to-end tests over the CSV fixtures in conftest.py."""

    @pytest.fixture
    def pipeline_output(self, data_dir, tmp_path):
        output_dir = tmp_path / "processed"
        output_path = run_pipeline(data_dir=data_dir, output_dir=output_dir)

        with open(output_path) as f:
            data = json.load(f)

        return data, output_path

    def test_pipeline_produces_file(self, pipeline_output):
        _, output_path = pipeline_output
        assert output_path.exists()
        assert output_path.name == REPORT_FILENAME

    def test_metadata(self, pipeline_output):
        data, _ = pipeline_output
        meta = data["metadata"]

        assert meta["version"] == "1.0"
        assert meta["total_employees"] == 6
        assert meta["total_machines"] == 3
        assert meta["risk_policy"] == {"at_risk_below": 70, "high_performer_from": 90}

    def test_entity_structure(self, pipeline_output):
        data, _ = pipeline_output
        for entity in data["employees"] + data["machines"]:
            assert set(entity) == _REQUIRED_ENTITY_KEYS

    def test_employee_scores(self, pipeline_output):
        data, _ = pipeline_output
        scores = {e["name"]: e["composite_score"] for e in data["employees"]}
        assert scores == {
            "Sarah J.": 92,
            "Mike R.": 65,
            "Jessica T.": 90,
            "David B.": 78,
            "Priya K.": 56,
            "Tom W.": 90,
        }

    def test_sarah_worked_example(self, pipeline_output):
        data, _ = pipeline_output
        sarah = data["employees"][0]
        assert sarah["forecast_score"] == 97
        assert sarah["risk_level"] == "high_performer"

    def test_machine_scores_are_health(self, pipeline_output):
        data, _ = pipeline_output
        assert [m["composite_score"] for m in data["machines"]] == [98, 45, 80]
        assert [m["role"] for m in data["machines"]] == ["IT", "Factory", "Fleet"]

    def test_top_performers(self, pipeline_output):
        data, _ = pipeline_output
        top = data["top_performers"]
        assert top["on_time_rate"] == ["Jessica T.", "Tom W.", "Sarah J."]
        assert top["composite_score"] == ["Sarah J.", "Jessica T.", "Tom W."]

    def test_alerts(self, pipeline_output):
        data, _ = pipeline_output
        alerts = data["alerts"]

        assert [a["name"] for a in alerts["underperforming"]] == ["Mike R.", "Priya K."]
        assert [a["name"] for a in alerts["fatigue"]] == ["Mike R."]
        assert alerts["fatigue"][0]["score"] == 15.0
        assert [a["name"] for a in alerts["maintenance"]] == ["Assembly Line 1"]
        assert alerts["total"] == 2

    def test_sales_forecast(self, pipeline_output):
        data, _ = pipeline_output
        assert data["sales"]["forecast"] == 27500
        assert len(data["sales"]["history"]) == 6

    def test_top_k(self, data_dir, tmp_path):
        output_path = run_pipeline(data_dir=data_dir, output_dir=tmp_path, top_k=1)
        data = json.loads(output_path.read_text())
        assert data["top_performers"]["on_time_rate"] == ["Jessica T."]


# ── Failure modes ─────────────────────────────────────────────────────


class TestRunPipelineErrors:
    def test_missing_data_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_pipeline(data_dir=tmp_path / "nope", output_dir=tmp_path)

    def test_missing_csv(self, data_dir, tmp_path):
        (data_dir / "sales.csv").unlink()
        with pytest.raises(IngestionError):
            run_pipeline(data_dir=data_dir, output_dir=tmp_path / "out")

    def test_out_of_range_metric(self, data_dir, tmp_path):
        (data_dir / "machines.csv").write_text("name,type,health\nBroken,IT,140\n")
        with pytest.raises(MetricRangeError, match="health"):
            run_pipeline(data_dir=data_dir, output_dir=tmp_path / "out")

    def test_non_numeric_fatigue(self, data_dir, tmp_path):
        csv = (data_dir / "employees.csv").read_text()
        (data_dir / "employees.csv").write_text(
            csv.replace("Mike R.,Logistics,65,60,70,85", "Mike R.,Logistics,65,60,70,exhausted")
        )
        output_dir = tmp_path / "out"
        with pytest.raises(MetricRangeError, match="fatigue"):
            run_pipeline(data_dir=data_dir, output_dir=output_dir)
        assert not (output_dir / REPORT_FILENAME).exists()

    def test_non_numeric_on_time_rate(self, data_dir, tmp_path):
        csv = (data_dir / "employees.csv").read_text()
        (data_dir / "employees.csv").write_text(
            csv.replace("Mike R.,Logistics,65,60,70,85", "Mike R.,Logistics,65,n/a,70,85")
        )
        with pytest.raises(MetricRangeError, match="on_time_rate"):
            run_pipeline(data_dir=data_dir, output_dir=tmp_path / "out")

    def test_infinite_sales_value(self, data_dir, tmp_path):
        (data_dir / "sales.csv").write_text("month,sales\nJan,12000\nFeb,inf\n")
        with pytest.raises(IngestionError, match="not finite"):
            run_pipeline(data_dir=data_dir, output_dir=tmp_path / "out")

    def test_empty_sales_series(self, data_dir, tmp_path):
        (data_dir / "sales.csv").write_text("month,sales\n")
        with pytest.raises(InvalidInputError, match="empty"):
            run_pipeline(data_dir=data_dir, output_dir=tmp_path / "out")

    def test_no_report_written_on_failure(self, data_dir, tmp_path):
        (data_dir / "machines.csv").write_text("name,type,health\nBroken,IT,140\n")
        output_dir = tmp_path / "out"
        with pytest.raises(MetricRangeError):
            run_pipeline(data_dir=data_dir, output_dir=output_dir)
        assert not (output_dir / REPORT_FILENAME).exists()
