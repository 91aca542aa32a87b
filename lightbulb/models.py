"""
Value types for the day/night color schedule.

ColorConfiguration and Schedule are immutable pydantic models. Schedule
validation is where malformed settings are rejected; the curve evaluator
itself never validates.
"""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DAY = timedelta(days=1)


def normalize_time_of_day(value: timedelta) -> timedelta:
    """Reduce a duration since midnight into [0, 24h)."""
    return value % DAY


# ============================================================================
# Data Structures
# ============================================================================

class ColorConfiguration(BaseModel):
    """Color temperature and brightness applied to a display."""
    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., gt=0, allow_inf_nan=False, description="Color temperature (Kelvin)")
    brightness: float = Field(..., ge=0.0, le=1.0, allow_inf_nan=False, description="Brightness (0.0-1.0)")

    def __str__(self) -> str:
        return f"{self.temperature:.0f}K / {self.brightness:.0%}"


class Schedule(BaseModel):
    """
    Complete day/night schedule.

    sunrise_time and sunset_time are offsets since local midnight and are
    normalized into [0, 24h). Both transition windows are centered on their
    event and span 2 * transition_duration.

    Validation requires both windows to fit strictly inside the shorter of
    the day and night arcs:

        2 * transition_duration < min(day_length, night_length)
    """
    model_config = ConfigDict(frozen=True)

    sunrise_time: timedelta
    day_configuration: ColorConfiguration
    sunset_time: timedelta
    night_configuration: ColorConfiguration
    transition_duration: timedelta = Field(timedelta(0))

    @field_validator("sunrise_time", "sunset_time")
    @classmethod
    def wrap_time_of_day(cls, value: timedelta) -> timedelta:
        return normalize_time_of_day(value)

    @field_validator("transition_duration")
    @classmethod
    def check_transition_duration(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("transition_duration cannot be negative")
        return value

    @model_validator(mode="after")
    def check_windows_do_not_overlap(self) -> "Schedule":
        if self.sunrise_time == self.sunset_time:
            raise ValueError("sunrise_time and sunset_time cannot be the same")

        shortest = min(self.day_length, self.night_length)
        if 2 * self.transition_duration >= shortest:
            raise ValueError(
                f"transition_duration {self.transition_duration} is too long: "
                f"sunrise and sunset transitions would overlap "
                f"(must be less than {shortest / 2})"
            )
        return self

    # ------------------------------------------------------------------
    # Derived anchors
    # ------------------------------------------------------------------

    @property
    def day_length(self) -> timedelta:
        return normalize_time_of_day(self.sunset_time - self.sunrise_time)

    @property
    def night_length(self) -> timedelta:
        return DAY - self.day_length

    @property
    def sunrise_start(self) -> timedelta:
        return normalize_time_of_day(self.sunrise_time - self.transition_duration)

    @property
    def sunrise_end(self) -> timedelta:
        return normalize_time_of_day(self.sunrise_time + self.transition_duration)

    @property
    def sunset_start(self) -> timedelta:
        return normalize_time_of_day(self.sunset_time - self.transition_duration)

    @property
    def sunset_end(self) -> timedelta:
        return normalize_time_of_day(self.sunset_time + self.transition_duration)

    def evaluate(self, instant: datetime) -> ColorConfiguration:
        """Configuration at the given instant."""
        from lightbulb.flow import calculate_color_configuration

        return calculate_color_configuration(
            self.sunrise_time, self.day_configuration,
            self.sunset_time, self.night_configuration,
            self.transition_duration, instant,
        )
