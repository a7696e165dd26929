# Metric bounds (every metric is a percentage)
METRIC_MIN = 0.0
METRIC_MAX = 100.0

# Forecast parameters
FORECAST_GROWTH_CUTOFF = 80  # Scores above this are projected to grow
FORECAST_GROWTH_MULTIPLIER = 1.05
FORECAST_DECAY_MULTIPLIER = 0.98
FORECAST_CEILING = 100  # No lower clamp; negative inputs stay negative

# Linear (series) forecast
DEFAULT_GROWTH_RATE = 0.10

# Risk policy cutoffs
DEFAULT_AT_RISK_BELOW = 70
DEFAULT_HIGH_PERFORMER_FROM = 90

# Metric sets used for composite scores
WORKER_SCORE_METRICS = ("completion_rate", "on_time_rate", "budget_rate")
ASSET_SCORE_METRICS = ("health",)

# Alert thresholds (an entity is flagged when its score is below these)
FATIGUE_READINESS_THRESHOLD = 20  # readiness = 100 - fatigue, so fatigue > 80
ASSET_HEALTH_THRESHOLD = 50
