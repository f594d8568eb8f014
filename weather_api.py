import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone

import requests
from requests import RequestException

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_TIMEOUT = 10
UNITS = "imperial"

UNKNOWN = "Unknown"
METERS_PER_MILE = 1609.34

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]
SECTOR_DEGREES = 360 / len(COMPASS_POINTS)

# Magnus formula constants
MAGNUS_A = 17.27
MAGNUS_B = 237.7
# Humidity (percent) is clamped to this floor before ln() in the dew point formula.
MIN_HUMIDITY = 0.01


class WeatherLookupError(Exception):
    """Base class for failures returned by fetch_weather."""


class CityNotFound(WeatherLookupError):
    def __init__(self, city_name: str):
        super().__init__(f"City '{city_name}' was not found by the weather provider.")
        self.city_name = city_name


class WeatherProviderError(WeatherLookupError):
    """Transport, status or payload failure talking to the provider; the cause is chained."""

    def __init__(self, city_name: str, cause):
        super().__init__(f"Weather provider request for '{city_name}' failed: {cause}")
        self.city_name = city_name
        self.cause = cause


@dataclass(frozen=True)
class WeatherReading:
    city_name: str
    country_name: str
    time: datetime
    wind_speed: float
    wind_direction: str
    visibility: float
    sky_conditions: str
    temperature_fahrenheit: float
    dew_point: float
    humidity: float
    pressure: float

    @property
    def temperature_celsius(self) -> float:
        return fahrenheit_to_celsius(self.temperature_fahrenheit)


@dataclass(frozen=True)
class ProviderObservation:
    """
    The subset of the provider payload we read, with every absent value
    already replaced by its default.
    """
    temp: float = 0.0
    humidity: float = 0.0
    pressure: float = 0.0
    wind_speed: float = 0.0
    wind_deg: float = 0.0
    visibility_m: float = 0.0
    description: str = UNKNOWN
    country: str = UNKNOWN

    @classmethod
    def from_payload(cls, data):
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        main = data.get("main") or {}
        wind = data.get("wind") or {}
        sys_block = data.get("sys") or {}
        weather = data.get("weather") or []
        first = weather[0] if weather else {}

        return cls(
            temp=_number(main.get("temp")),
            humidity=_number(main.get("humidity")),
            pressure=_number(main.get("pressure")),
            wind_speed=_number(wind.get("speed")),
            wind_deg=_number(wind.get("deg")),
            visibility_m=_number(data.get("visibility")),
            description=_text((first or {}).get("description")),
            country=_text(sys_block.get("country")),
        )


# None -> 0.0, anything else must be a finite number.
def _number(value) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"Expected a finite number, got {value!r}")
    return result

# None or "" -> UNKNOWN, anything else must be a string.
def _text(value) -> str:
    if value is None or value == "":
        return UNKNOWN
    if not isinstance(value, str):
        raise ValueError(f"Expected a string, got {value!r}")
    return value

def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9

def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32

def wind_direction(degrees: float) -> str:
    """Map 0–360 degrees onto the 16-point compass (N at 0, clockwise)."""
    index = int(round((degrees % 360) / SECTOR_DEGREES)) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]

def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE

def dew_point(temp_f: float, humidity: float) -> float:
    """
    Dew point in Fahrenheit (1 decimal) from air temperature in Fahrenheit and
    relative humidity in percent, using the Magnus approximation.
    Humidity below MIN_HUMIDITY is clamped before the log. Raises ValueError
    when the temperature is too large for the result to be finite.
    """
    temp_c = fahrenheit_to_celsius(temp_f)
    if not math.isfinite(temp_c):
        raise ValueError(f"Temperature out of range: {temp_f!r}")
    humidity = max(humidity, MIN_HUMIDITY)
    alpha = (MAGNUS_A * temp_c) / (MAGNUS_B + temp_c) + math.log(humidity / 100.0)
    dew_point_c = (MAGNUS_B * alpha) / (MAGNUS_A - alpha)
    result = round(celsius_to_fahrenheit(dew_point_c), 1)
    if not math.isfinite(result):
        raise ValueError(f"Dew point out of range for {temp_f!r}F at {humidity!r}%")
    return result

def build_params(city_name: str, api_key: str):
    return {"q": city_name, "appid": api_key, "units": UNITS}

def to_reading(city_name: str, observation: ProviderObservation, observed_at: datetime) -> WeatherReading:
    return WeatherReading(
        city_name=city_name,
        country_name=observation.country,
        time=observed_at,
        wind_speed=observation.wind_speed,
        wind_direction=wind_direction(observation.wind_deg),
        visibility=meters_to_miles(observation.visibility_m),
        sky_conditions=observation.description,
        temperature_fahrenheit=observation.temp,
        dew_point=dew_point(observation.temp, observation.humidity),
        humidity=observation.humidity,
        pressure=observation.pressure,
    )

# Calls the provider once and returns a WeatherReading, or raises CityNotFound / WeatherProviderError.
def fetch_weather(city_name: str, *, api_key: str = "", base_url: str | None = None, timeout: float | None = None) -> WeatherReading:
    """
    Fetch current conditions for `city_name` (sent as-is) in imperial units.
    The returned reading echoes `city_name` and is stamped with the current UTC time.
    """
    if not city_name or not city_name.strip():
        raise ValueError("city_name must be a non-empty string")

    url = base_url or OPENWEATHER_URL
    logger.debug("Fetching weather for %r from %s", city_name, url)

    try:
        response = requests.get(url, params=build_params(city_name, api_key), timeout=timeout if timeout is not None else DEFAULT_TIMEOUT)
    except RequestException as e:
        logger.error("Weather provider unreachable for %r: %s", city_name, e)
        raise WeatherProviderError(city_name, e) from e

    if response.status_code == 404:
        logger.info("Weather provider has no city %r", city_name)
        raise CityNotFound(city_name)

    try:
        response.raise_for_status()
        data = response.json()
        if isinstance(data, dict) and str(data.get("cod")) == "404":
            logger.info("Weather provider has no city %r", city_name)
            raise CityNotFound(city_name)
        observation = ProviderObservation.from_payload(data)
        reading = to_reading(city_name, observation, datetime.now(timezone.utc))
    except CityNotFound:
        raise
    except (RequestException, ValueError, TypeError, AttributeError, KeyError, IndexError, ArithmeticError) as e:
        logger.error("Weather provider returned an unusable response for %r: %s", city_name, e)
        raise WeatherProviderError(city_name, e) from e

    return reading
