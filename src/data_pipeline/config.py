from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"

# Expected CSV exports in the raw data directory
FILE_NAMES = {
    "employees": "employees.csv",
    "machines": "machines.csv",
    "sales": "sales.csv",
}

# Metric columns carried onto each entity (after header normalization)
EMPLOYEE_METRIC_COLUMNS = ["completion_rate", "on_time_rate", "budget_rate", "fatigue"]
MACHINE_METRIC_COLUMNS = ["health"]

# Header aliases applied after snake_casing
COLUMN_ALIASES = {
    "employee": "name",
    "employee_name": "name",
    "machine": "name",
    "asset": "name",
    "type": "role",
    "asset_type": "role",
    "title": "role",
    "revenue": "sales",
}

# Report output
REPORT_FILENAME = "dashboard_report.json"
DEFAULT_TOP_K = 3
