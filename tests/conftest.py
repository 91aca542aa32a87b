"""Shared pytest fixtures for all tests."""

import pytest
from datetime import timedelta

from lightbulb.models import ColorConfiguration, Schedule


@pytest.fixture
def day_configuration():
    """Cool, full-brightness daytime configuration."""
    return ColorConfiguration(temperature=6600, brightness=1)


@pytest.fixture
def night_configuration():
    """Warm, dimmed nighttime configuration."""
    return ColorConfiguration(temperature=3600, brightness=0.85)


@pytest.fixture
def schedule(day_configuration, night_configuration):
    """Sunrise 07:00, sunset 18:00, 1h30 transitions."""
    return Schedule(
        sunrise_time=timedelta(hours=7),
        day_configuration=day_configuration,
        sunset_time=timedelta(hours=18),
        night_configuration=night_configuration,
        transition_duration=timedelta(hours=1, minutes=30),
    )
