"""
Application-wide constants for the air quality graph service.

Field allow-lists, time thresholds and pagination defaults.
"""

# Device API defaults
DEFAULT_BASE_URL = "https://quant-aq.com/device-api/v1/devices"
DEFAULT_LIMIT = 20
DEFAULT_PER_PAGE = 2
DEFAULT_API_KEY_ENV = "QUANTAQ_APIKEY"

# Pollutant concentrations that may not be negative
POLLUTANT_KEYS = ("co", "no", "no2", "o3", "pm25")

# High-resolution fields only reported by the raw endpoint (OPC particle bins)
RAW_KEYS = ("bin0", "bin1", "bin2", "bin3", "bin4", "bin5")

# Side channel holding the newest raw sample when timestamps don't line up
LAST_RAW_KEY = "lastRaw"

GRAPH_NODE_KEYS = POLLUTANT_KEYS + RAW_KEYS + ("sn", "timestamp", "timestamp_local")

MET_KEYS = ("rh_manifold", "temp_manifold", "wind_dir", "wind_speed")

# Superset of GRAPH_NODE_KEYS
LATEST_NODE_KEYS = GRAPH_NODE_KEYS + MET_KEYS + ("geo", LAST_RAW_KEY)

# Geo coordinates are stored with reduced precision
GEO_DECIMALS = 3

# Time thresholds (minutes)
GRAPH_ADMISSION_MINUTES = 15
GAP_MINUTES = 30
GAP_NEXT_POINT_MINUTES = 20
GAP_PREV_POINT_MINUTES = 10
NEW_DATA_MINUTES = 1

# Graph window (hours)
GRAPH_WINDOW_HOURS = 24

# Backfill pagination
BACKFILL_PER_PAGE = 100
BACKFILL_LIMIT = 1400
BACKFILL_MAX_REQUESTS = BACKFILL_LIMIT // BACKFILL_PER_PAGE

# Application defaults
DEFAULT_MAX_WORKERS = 4
DEFAULT_STORAGE_PATH = "data/state.json"
