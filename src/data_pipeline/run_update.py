"""Run the complete dashboard scoring pipeline.

Usage:
    python -m src.data_pipeline.run_update [data_dir] [output_dir]

Examples:
    python -m src.data_pipeline.run_update
    python -m src.data_pipeline.run_update /path/to/csvs /tmp/out
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from src.data_pipeline.cleaning import DataCleaner
from src.data_pipeline.config import (
    DEFAULT_TOP_K,
    EMPLOYEE_METRIC_COLUMNS,
    MACHINE_METRIC_COLUMNS,
    PROCESSED_DATA_DIR,
    RAW_DATA_DIR,
    REPORT_FILENAME,
)
from src.data_pipeline.ingestion import DashboardIngester
from src.logging_config import setup_logging
from src.ranking.alerts import fatigue_alerts, health_alerts, performance_alerts
from src.ranking.ranking_service import top_n
from src.scoring_engine.config import ASSET_SCORE_METRICS, WORKER_SCORE_METRICS
from src.scoring_engine.score_engine import ScoreEngine

logger = logging.getLogger(__name__)


def _alert_to_dict(entity, score) -> dict:
    return {"name": entity.name, "role": entity.role, "score": score}


def run_pipeline(
    data_dir: Path | None = None,
    output_dir: Path | None = None,
    top_k: int = DEFAULT_TOP_K,
) -> Path:
    """Run the complete dashboard pipeline.

    Args:
        data_dir: Directory containing the raw CSVs.
            Defaults to ``data/raw/``.
        output_dir: Directory for JSON output.
            Defaults to ``data/processed/``.
        top_k: Number of entries in each top-performer list.

    Returns:
        Path to the generated JSON report.

    Raises:
        FileNotFoundError: If the data directory doesn't exist.
        IngestionError: If a CSV cannot be read.
        MetricRangeError: If a metric is outside [0, 100].
        InvalidInputError: If an entity cannot be scored or the sales
            series is empty.
    """
    if data_dir is None:
        data_dir = RAW_DATA_DIR
    if output_dir is None:
        output_dir = PROCESSED_DATA_DIR

    data_dir = Path(data_dir)
    output_dir = Path(output_dir)

    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    logger.info("Starting pipeline (data: %s)", data_dir)

    # 1. Ingest
    logger.info("Step 1/5: Ingesting CSV files...")
    raw = DashboardIngester(data_dir).read_all()

    # 2. Clean and validate
    logger.info("Step 2/5: Cleaning and validating data...")
    cleaner = DataCleaner()
    cleaned = cleaner.clean_all(raw)
    employees = cleaner.records_to_entities(cleaned["employees"], EMPLOYEE_METRIC_COLUMNS)
    machines = cleaner.records_to_entities(cleaned["machines"], MACHINE_METRIC_COLUMNS)
    sales = cleaned["sales"]
    logger.info(
        "Loaded: %d employees, %d machines, %d sales periods",
        len(employees), len(machines), len(sales),
    )

    # 3. Score
    logger.info("Step 3/5: Scoring entities...")
    worker_engine = ScoreEngine(metric_fields=WORKER_SCORE_METRICS)
    asset_engine = ScoreEngine(metric_fields=ASSET_SCORE_METRICS)
    scored_employees = worker_engine.score_all(employees)
    scored_machines = asset_engine.score_all(machines)

    # 4. Rank and scan for risks
    logger.info("Step 4/5: Ranking and scanning for risks...")
    top_on_time = (
        top_n(employees, "on_time_rate", top_k)
        if all("on_time_rate" in e.metrics for e in employees)
        else []
    )
    top_composite = top_n(scored_employees, lambda s: s.composite_score, top_k)

    underperforming = performance_alerts(scored_employees, worker_engine.risk_policy.at_risk_below)
    fatigued = fatigue_alerts(employees)
    failing = health_alerts(machines)
    for entity, score in fatigued + failing:
        logger.warning("Risk detected: %s (%s) score=%s", entity.name, entity.role, score)

    sales_forecast = worker_engine.linear_forecast(sales)

    # 5. Output JSON
    logger.info("Step 5/5: Generating JSON output...")
    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "total_employees": len(employees),
            "total_machines": len(machines),
            "risk_policy": {
                "at_risk_below": worker_engine.risk_policy.at_risk_below,
                "high_performer_from": worker_engine.risk_policy.high_performer_from,
            },
        },
        "employees": [s.to_dict() for s in scored_employees],
        "machines": [s.to_dict() for s in scored_machines],
        "top_performers": {
            "on_time_rate": [e.name for e in top_on_time],
            "composite_score": [s.name for s in top_composite],
        },
        "alerts": {
            "underperforming": [
                _alert_to_dict(s.entity, score) for s, score in underperforming
            ],
            "fatigue": [_alert_to_dict(e, score) for e, score in fatigued],
            "maintenance": [_alert_to_dict(e, score) for e, score in failing],
            "total": len(fatigued) + len(failing),
        },
        "sales": {
            "history": sales,
            "forecast": sales_forecast,
        },
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / REPORT_FILENAME

    with open(output_file, "w") as f:
        json.dump(output_data, f, indent=2)

    logger.info("Pipeline complete! Output: %s", output_file)
    logger.info(
        "  Alerts: %d fatigue, %d maintenance, %d underperforming",
        len(fatigued), len(failing), len(underperforming),
    )

    return output_file


if __name__ == "__main__":
    setup_logging()

    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_pipeline(data_dir, output_dir)
        print(f"Pipeline complete: {output}")
    except Exception:
        logger.exception("Pipeline failed")
        sys.exit(1)
