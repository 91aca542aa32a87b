"""
Configuration management with environment variable support.

All settings can be overridden via environment variables.
Automatically loads .env file if present.
"""

import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import ValidationError

# Load .env file from project root (one level up from lightbulb/)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv("LOG_LEVEL", "INFO")

# Schedule configuration (times of day as HH:MM[:SS])
SUNRISE_TIME: str = os.getenv("SUNRISE_TIME", "07:00:00")
SUNSET_TIME: str = os.getenv("SUNSET_TIME", "18:00:00")
TRANSITION_DURATION: str = os.getenv("TRANSITION_DURATION", "01:30:00")

# Day configuration
DAY_TEMPERATURE: float = float(os.getenv("DAY_TEMPERATURE", "6600"))  # Kelvin
DAY_BRIGHTNESS: float = float(os.getenv("DAY_BRIGHTNESS", "1.0"))

# Night configuration
NIGHT_TEMPERATURE: float = float(os.getenv("NIGHT_TEMPERATURE", "3600"))  # Kelvin
NIGHT_BRIGHTNESS: float = float(os.getenv("NIGHT_BRIGHTNESS", "0.85"))

# IANA time zone used for "now" (empty = naive local time)
TIMEZONE: str = os.getenv("TIMEZONE", "")

# HTTP API
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))


_TIME_OF_DAY_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


class ScheduleConfigError(ValueError):
    """Raised when the configured schedule is invalid."""


def parse_time_of_day(text: str) -> timedelta:
    """
    Parse "HH:MM" or "HH:MM:SS" into a duration since midnight.

    Hours may go up to 24 so that "24:00" can express a full day length.

    Raises:
        ScheduleConfigError: If the text is not a valid time of day
    """
    match = _TIME_OF_DAY_PATTERN.match(text)
    if not match:
        raise ScheduleConfigError(f"Invalid time of day '{text}' (expected HH:MM or HH:MM:SS)")

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if hours > 24 or minutes > 59 or seconds > 59:
        raise ScheduleConfigError(f"Invalid time of day '{text}': out of range")

    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def load_schedule():
    """
    Build the Schedule described by the environment.

    Returns:
        Validated Schedule

    Raises:
        ScheduleConfigError: If any value is malformed or the transition
            windows would overlap
    """
    from lightbulb.models import ColorConfiguration, Schedule

    try:
        return Schedule(
            sunrise_time=parse_time_of_day(SUNRISE_TIME),
            day_configuration=ColorConfiguration(
                temperature=DAY_TEMPERATURE,
                brightness=DAY_BRIGHTNESS,
            ),
            sunset_time=parse_time_of_day(SUNSET_TIME),
            night_configuration=ColorConfiguration(
                temperature=NIGHT_TEMPERATURE,
                brightness=NIGHT_BRIGHTNESS,
            ),
            transition_duration=parse_time_of_day(TRANSITION_DURATION),
        )
    except ValidationError as e:
        raise ScheduleConfigError(f"Invalid schedule configuration: {e}") from e
