# Cloud warehouse providers the dashboard can toggle between
CLOUD_PROVIDERS = ("Google BigQuery", "Azure Synapse")
DEFAULT_CLOUD_PROVIDER = CLOUD_PROVIDERS[0]

# Starting values for the demo snapshot
DEFAULT_SAVINGS = 450000
DEFAULT_LOAD_HISTORY = [45, 50, 48, 55, 60]
DEFAULT_LOAD_PREDICTION = [60, 62, 65, 70, 68]
DEFAULT_SALES_HISTORY = [12000, 15000, 11000, 20000, 23000, 25000]

DEFAULT_EMPLOYEES = [
    # name, role, completion_rate, on_time_rate, budget_rate, fatigue
    ("Sarah J.", "Engineer", 92, 88, 95, 20),
    ("Mike R.", "Logistics", 65, 60, 70, 85),
    ("Jessica T.", "Sales", 90, 95, 85, 40),
    ("David B.", "Manager", 78, 80, 75, 55),
    ("Priya K.", "Analyst", 55, 50, 62, 30),
    ("Tom W.", "Operations", 88, 92, 90, 70),
]

DEFAULT_MACHINES = [
    # name, type, health
    ("Server Cluster A", "IT", 98),
    ("Assembly Line 1", "Factory", 45),
    ("Delivery Truck 4", "Fleet", 80),
]

# Employee actions
REST_SCORE_BOOST = 10
TRAINING_SCORE_BOOST = 15

# Machine actions
MAINTENANCE_SAVINGS = 5000

# Refresh tick
LOAD_SAMPLE_MIN = 50
LOAD_SAMPLE_MAX = 79  # inclusive
HEALTH_DECAY_PER_TICK = 1

# Summary
TOP_PERFORMER_COUNT = 3
