# === Variance profiles ===
# "spread" scheme
BALANCED_NOISE = 0.10          # weight = 1 +/- up to 10%
MODERATE_LOW = 0.5             # weight ~ U(0.5, 1.5)
MODERATE_HIGH = 1.5

# "multiplicative" scheme: weight = 1 + u * factor
MULTIPLICATIVE_FACTORS = {
    "balanced": 0.2,
    "moderate": 1.0,
    "high": 3.0,
}

PROFILE_ALIASES = {
    "medium": "moderate",
    "skewed": "high",
    "very_skewed": "high",
}

DEFAULT_PROFILE = "balanced"
DEFAULT_SCHEME = "spread"
DEFAULT_STRATEGY = "largest_remainder"

# Numeric stability for normalization
WEIGHT_EPS = 1e-9
UNIFORM_MAX = 1.0 - 1e-12

# === Metrics ===
METRIC_IMPRESSIONS = "impressions"
METRIC_CLICKS = "clicks"
METRIC_INSTALLS = "installs"
METRIC_PRIMARY_EVENTS = "primary_events"
METRIC_SECONDARY_EVENTS = "secondary_events"

BASE_METRIC_LABELS = {
    METRIC_IMPRESSIONS: "Impressions",
    METRIC_CLICKS: "Clicks",
    METRIC_INSTALLS: "Installs",
}

DEFAULT_PRIMARY_LABEL = "Paid Events"
DEFAULT_SECONDARY_LABEL = "Second Event"

CREATIVE_HEADER = "Creative"
CREATIVE_NAME_TEMPLATE = "Creative {index}"

# === Export ===
ARTIFACTS_DIR = "artifacts"
DEFAULT_EXPORT_FILENAME = "creative_distribution.csv"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
