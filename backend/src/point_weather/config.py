import os
from pathlib import Path

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DB_PATH = Path(os.environ.get("POINT_WEATHER_DB", DATA_DIR / "point_weather.duckdb"))
EXPORT_DIR = DATA_DIR / "exports"

# HTTP
REQUEST_TIMEOUT_S = float(os.environ.get("POINT_WEATHER_TIMEOUT", "30"))
USER_AGENT = "point-weather/0.1 (climatology engine)"

# Open-Meteo historical archive (hourly, exact lookups and climatology samples)
OPEN_METEO_ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"
OPEN_METEO_DOCS_URL = "https://open-meteo.com/en/docs"
OPEN_METEO_HOURLY_VARIABLES = [
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "wind_speed_10m",
    "apparent_temperature",
    "snowfall",
    "weathercode",
]

# NASA POWER daily point API (range series)
NASA_POWER_DAILY_URL = "https://power.larc.nasa.gov/api/temporal/daily/point"
NASA_POWER_PARAMETERS = ["T2M", "RH2M", "PRECTOTCORR", "WS10M", "ALLSKY_SFC_SW_DWN"]
NASA_POWER_COMMUNITY = "AG"

# Nominatim reverse geocoding
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"

# Providers mark "no measurement" with this exact value
SENTINEL_VALUE = -999

# Climatology: number of prior years sampled for a future date
CLIMATOLOGY_YEARS = 10

# Thread pool size for per-year and per-marker fan-out
MAX_WORKERS = 8

# Export
FILENAME_MAX_LEN = 120
EXPORT_FALLBACK_PATH = "/markers"

# Result record keys -> WeatherSample attributes
CONTINUOUS_VARIABLES = {
    "t2m": "temperature",
    "rh2m": "humidity",
    "ws10m": "wind_speed",
    "apparent_temperature": "apparent_temperature",
}
OCCURRENCE_VARIABLES = {
    "prectot": "precipitation",
    "snowfall": "snowfall",
}

# WMO weather interpretation codes
WEATHER_CODE_LABELS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Drizzle: Light",
    53: "Drizzle: Moderate",
    55: "Drizzle: Dense",
    56: "Freezing Drizzle: Light",
    57: "Freezing Drizzle: Dense",
    61: "Rain: Slight",
    63: "Rain: Moderate",
    65: "Rain: Heavy",
    66: "Freezing Rain: Light",
    67: "Freezing Rain: Heavy",
    71: "Snow fall: Slight",
    73: "Snow fall: Moderate",
    75: "Snow fall: Heavy",
    77: "Snow grains",
    80: "Rain showers: Slight",
    81: "Rain showers: Moderate",
    82: "Rain showers: Violent",
    85: "Snow showers: Slight",
    86: "Snow showers: Heavy",
    95: "Thunderstorm: Slight/Moderate",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

UNITS = {
    "temperature_2m": "°C",
    "relative_humidity_2m": "%",
    "precipitation": "mm",
    "wind_speed_10m": "m/s",
    "apparent_temperature": "°C",
    "snowfall": "mm (water equivalent)",
    "weathercode": "WMO codes (mapped to descriptions)",
}
