"""Application constants."""

DEFAULT_INPUT_FILE = "city.geojson"
DEFAULT_OUTPUT_FILE = "roads.csv"
EARTH_RADIUS_KM = 6371.0
LENGTH_DECIMALS = 3
CSV_DELIMITER = ";"
OUTPUT_HEADERS = [
    "RoadName",
    "From",
    "To",
    "LengthKm",
    "SpeedLimitKmH",
]
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "event",
    "status",
    "path",
    "features_in",
    "records_out",
    "rejected",
    "duration_ms",
    "error_code",
    "message",
)
