"""
Day/night flow curve.

Maps a point in time to the ColorConfiguration that should be applied,
given sunrise/sunset times, the day and night configurations and a
transition duration.

The 24h cycle is treated as a ring. Four anchors split it into phases:

    sunrise_start = sunrise - transition    (night -> day begins)
    sunrise_end   = sunrise + transition    (day plateau begins)
    sunset_start  = sunset - transition     (day -> night begins)
    sunset_end    = sunset + transition     (night plateau begins)

Transition windows are closed intervals, plateaus are open. Plateaus return
the stored configuration object unchanged. Inside a window the progress
t in [0, 1] is eased with smoothstep, which has zero slope at both ends, so
the curve meets the plateaus without a visible kink.

Everything here is pure: no I/O, no logging, no shared state. The
evaluator never raises. Schedules whose windows would overlap are rejected
by Schedule validation; when such values are passed in directly, the
transition half-width is clamped to half of the shorter arc so the windows
at most touch.
"""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Iterator

from lightbulb.lighting_math import clamp, lerp, smoothstep
from lightbulb.models import DAY, ColorConfiguration, Schedule, normalize_time_of_day


class Phase(str, Enum):
    """Position of a time-of-day within the daily cycle."""
    DAY = "day"
    NIGHT = "night"
    SUNRISE = "sunrise"
    SUNSET = "sunset"


def time_of_day(instant: datetime) -> timedelta:
    """
    Offset since local midnight, in the instant's own wall-clock time.

    The calendar date and UTC offset are ignored; 23:30 at +02:00 and
    23:30 at -05:00 are both 23:30.
    """
    return timedelta(
        hours=instant.hour,
        minutes=instant.minute,
        seconds=instant.second,
        microseconds=instant.microsecond,
    )


def _half_width(sunrise_time: timedelta, sunset_time: timedelta, transition_duration: timedelta) -> timedelta:
    """Transition half-width, limited so the two windows never overlap."""
    day_length = normalize_time_of_day(sunset_time - sunrise_time)
    shortest = min(day_length, DAY - day_length)
    return max(timedelta(0), min(transition_duration, shortest // 2))


def _progress(elapsed: timedelta, window: timedelta) -> float:
    # Zero-width window: switch straight to the target
    if window <= timedelta(0):
        return 1.0
    return clamp(elapsed / window, 0.0, 1.0)


def _locate(
    sunrise_time: timedelta,
    sunset_time: timedelta,
    transition_duration: timedelta,
    instant: datetime,
) -> tuple[Phase, float]:
    """
    Classify the instant and return its progress through the phase.

    Progress is only meaningful for SUNRISE and SUNSET.
    """
    sunrise_time = normalize_time_of_day(sunrise_time)
    sunset_time = normalize_time_of_day(sunset_time)
    half = _half_width(sunrise_time, sunset_time, transition_duration)
    window = 2 * half
    now = time_of_day(instant)

    # Forward distance on the ring from each window start
    into_sunrise = normalize_time_of_day(now - (sunrise_time - half))
    if into_sunrise <= window:
        return Phase.SUNRISE, _progress(into_sunrise, window)

    into_sunset = normalize_time_of_day(now - (sunset_time - half))
    if into_sunset <= window:
        return Phase.SUNSET, _progress(into_sunset, window)

    day_start = sunrise_time + half
    day_plateau = normalize_time_of_day((sunset_time - half) - day_start)
    if normalize_time_of_day(now - day_start) < day_plateau:
        return Phase.DAY, 0.0

    return Phase.NIGHT, 0.0


def _blend(start: ColorConfiguration, end: ColorConfiguration, weight: float) -> ColorConfiguration:
    weight = clamp(weight, 0.0, 1.0)
    if weight <= 0.0:
        return start
    if weight >= 1.0:
        return end

    # Clamped to the endpoint range so rounding never overshoots
    return ColorConfiguration(
        temperature=clamp(lerp(start.temperature, end.temperature, weight), start.temperature, end.temperature),
        brightness=clamp(lerp(start.brightness, end.brightness, weight), start.brightness, end.brightness),
    )


def get_phase(
    sunrise_time: timedelta,
    sunset_time: timedelta,
    transition_duration: timedelta,
    instant: datetime,
) -> Phase:
    """Phase of the daily cycle the instant falls into."""
    phase, _ = _locate(sunrise_time, sunset_time, transition_duration, instant)
    return phase


def calculate_color_configuration(
    sunrise_time: timedelta,
    day_configuration: ColorConfiguration,
    sunset_time: timedelta,
    night_configuration: ColorConfiguration,
    transition_duration: timedelta,
    instant: datetime,
) -> ColorConfiguration:
    """
    Configuration that should be applied at the given instant.

    Args:
        sunrise_time: Offset of sunrise since local midnight
        day_configuration: Configuration held during the day plateau
        sunset_time: Offset of sunset since local midnight
        night_configuration: Configuration held during the night plateau
        transition_duration: Half-width of each transition window
        instant: Point in time to evaluate (naive or aware)

    Returns:
        day_configuration or night_configuration itself on a plateau,
        otherwise a smoothstep-eased blend between them.

    Example:
        calculate_color_configuration(
            timedelta(hours=7), ColorConfiguration(temperature=6600, brightness=1),
            timedelta(hours=18), ColorConfiguration(temperature=3600, brightness=0.85),
            timedelta(hours=1, minutes=30), datetime(2019, 1, 1, 14, 0),
        )
        # Returns: the day configuration, unchanged
    """
    phase, progress = _locate(sunrise_time, sunset_time, transition_duration, instant)

    if phase is Phase.DAY:
        return day_configuration
    if phase is Phase.NIGHT:
        return night_configuration
    if phase is Phase.SUNRISE:
        return _blend(night_configuration, day_configuration, smoothstep(progress))
    return _blend(day_configuration, night_configuration, smoothstep(progress))


def sample_day(
    schedule: Schedule,
    day: date,
    step: timedelta,
    tzinfo=None,
) -> Iterator[tuple[datetime, ColorConfiguration]]:
    """
    Yield (instant, configuration) pairs across one calendar day.

    Sampling starts at local midnight and stops before the next midnight.

    Raises:
        ValueError: If step is not positive
    """
    if step <= timedelta(0):
        raise ValueError(f"step must be positive, got {step}")

    start = datetime.combine(day, time(0), tzinfo=tzinfo)
    offset = timedelta(0)
    while offset < DAY:
        instant = start + offset
        yield instant, schedule.evaluate(instant)
        offset += step
