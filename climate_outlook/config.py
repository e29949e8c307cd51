"""
Climate Outlook — Configuration: environment overrides, alias and lookup tables.
"""
import os
from pathlib import Path
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Environment — dataset source and query defaults
# ---------------------------------------------------------------------------
CSV_PATH = os.environ.get("CSV_PATH") or None
DEFAULT_RADIUS_DEG = float(os.environ.get("CSV_RADIUS_DEG", "1.0"))
DEFAULT_WINDOW_DAYS = int(os.environ.get("CSV_WINDOW_DAYS", "7"))
CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "*")
REPORTS_FOLDER = Path(os.environ.get("OUTLOOK_REPORTS_DIR", str(Path.cwd() / "reports")))

# Rows parsed per chunk while ingesting; cancellation is checked between chunks
LOAD_CHUNK_ROWS = int(os.environ.get("CSV_CHUNK_ROWS", "50000"))

# ---------------------------------------------------------------------------
# Header aliases: canonical key → accepted header spellings (lowercase, trimmed)
# ---------------------------------------------------------------------------
HEADER_ALIASES = MappingProxyType({
    "date": ("date", "validdate"),
    "lat": ("lat", "latitude", "y"),
    "lon": ("lon", "longitude", "x", "lng"),
    "temperature": (
        "temperature", "temp", "tavg", "tmean", "t_2m",
        "temperature(⁰c)", "temperature(°c)", "temperature_c",
    ),
    "humidity": ("humidity", "rh", "humidity(%)", "relative_humidity", "humidity_pct"),
    "precipitation": ("precipitation", "prcp", "rain", "rainfall", "precipitation_mm"),
    "wind": ("wind", "wind_speed", "wind_speed_10m"),
    "cloud": ("cloud", "cloud_cover", "clt"),
    "dust": ("dust", "aerosol", "pm25", "pm10", "aod"),
    "snow": ("snow", "snow_depth", "snd"),
    "solar": ("solar", "uv", "uv_index", "solar_radiation"),
})

COORDINATE_KEYS = ("date", "lat", "lon")
VARIABLE_KEYS = tuple(k for k in HEADER_ALIASES if k not in COORDINATE_KEYS)

# ---------------------------------------------------------------------------
# Variable display names and units (fallback: capitalized key / "units")
# ---------------------------------------------------------------------------
VARIABLE_DISPLAY_NAMES = MappingProxyType({
    "temperature": "Temperature",
    "precipitation": "Precipitation",
    "wind": "Wind Speed",
    "humidity": "Humidity",
    "cloud": "Cloud Cover",
    "dust": "Dust/Aerosols",
    "snow": "Snow",
    "solar": "Solar Radiation",
})

VARIABLE_UNITS = MappingProxyType({
    "temperature": "°C",
    "humidity": "%",
    "precipitation": "mm",
    "wind": "km/h",
    "cloud": "%",
    "dust": "μg/m³",
    "snow": "cm",
    "solar": "UV Index",
})

DEFAULT_UNIT = "units"

# ---------------------------------------------------------------------------
# Temporal groupings
# ---------------------------------------------------------------------------
SEASON_MONTHS = MappingProxyType({
    "spring": frozenset({3, 4, 5}),
    "summer": frozenset({6, 7, 8}),
    "fall": frozenset({9, 10, 11}),
    "winter": frozenset({12, 1, 2}),
})

# Day-of-year span used for year-boundary wraparound
YEAR_WRAP_DAYS = 366

# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------
HISTORY_LENGTH = 30          # values kept in historicalData
MIN_TREND_POINTS = 12        # fewer (year, value) pairs → trend 0

# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------
DAYS_PER_MONTH = 30.4375
TIMELINE_DEFAULT_MONTHS = 6
TIMELINE_MONTHS_RANGE = (1, 12)
TIMELINE_DEFAULT_STEP_DAYS = 7
TIMELINE_STEP_DAYS_RANGE = (1, 14)
