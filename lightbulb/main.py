"""
HTTP API exposing the day/night flow curve.

Read-only: the periodic scheduler and display backend that apply the
returned configuration live outside this service and poll it.
"""

from fastapi import FastAPI, HTTPException, APIRouter, Query
from pydantic import BaseModel
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import uvicorn

from lightbulb.config import API_HOST, API_PORT, TIMEZONE, load_schedule
from lightbulb.flow import Phase, get_phase, sample_day
from lightbulb.logger import logger
from lightbulb.models import ColorConfiguration, Schedule


# ============================================================================
# State
# ============================================================================

# Loaded once at startup, immutable afterwards
schedule: Optional[Schedule] = None
timezone: Optional[ZoneInfo] = None


def format_time_of_day(value: timedelta) -> str:
    """Render a duration since midnight as HH:MM:SS."""
    total = int(value.total_seconds())
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def current_instant() -> datetime:
    return datetime.now(timezone) if timezone else datetime.now()


def get_schedule() -> Schedule:
    if schedule is None:
        raise HTTPException(status_code=503, detail="Schedule not loaded")
    return schedule


# ============================================================================
# Lifespan
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    global schedule, timezone

    logger.info("Starting LightBulb flow API")

    try:
        timezone = ZoneInfo(TIMEZONE) if TIMEZONE else None
    except (ZoneInfoNotFoundError, ValueError):
        logger.error(f"Unknown TIMEZONE '{TIMEZONE}'", exc_info=True)
        raise

    try:
        schedule = load_schedule()
    except ValueError:
        logger.error("Failed to load schedule configuration", exc_info=True)
        raise

    logger.info(
        f"Schedule loaded: sunrise={format_time_of_day(schedule.sunrise_time)}, "
        f"sunset={format_time_of_day(schedule.sunset_time)}, "
        f"transition={format_time_of_day(schedule.transition_duration)}, "
        f"day={schedule.day_configuration}, night={schedule.night_configuration}, "
        f"timezone={TIMEZONE or 'local'}"
    )

    yield

    logger.info("Shutting down LightBulb flow API")
    schedule = None
    timezone = None


app = FastAPI(title="LightBulb Flow", lifespan=lifespan)
configuration_router = APIRouter(prefix="/configuration", tags=["configuration"])


# ============================================================================
# Request / response models
# ============================================================================

class ConfigurationResponse(BaseModel):
    at: datetime
    phase: Phase
    temperature: float
    brightness: float


class EvaluateRequest(BaseModel):
    schedule: Schedule
    at: datetime


def build_response(active: Schedule, instant: datetime) -> ConfigurationResponse:
    configuration: ColorConfiguration = active.evaluate(instant)
    phase = get_phase(active.sunrise_time, active.sunset_time, active.transition_duration, instant)
    return ConfigurationResponse(
        at=instant,
        phase=phase,
        temperature=configuration.temperature,
        brightness=configuration.brightness,
    )


# ------------------------------------------------------------------
# Schedule
# ------------------------------------------------------------------

@app.get("/schedule")
async def get_schedule_endpoint():
    active = get_schedule()
    return {
        "sunrise_time": format_time_of_day(active.sunrise_time),
        "sunset_time": format_time_of_day(active.sunset_time),
        "transition_duration": format_time_of_day(active.transition_duration),
        "day_configuration": active.day_configuration.model_dump(),
        "night_configuration": active.night_configuration.model_dump(),
        "anchors": {
            "sunrise_start": format_time_of_day(active.sunrise_start),
            "sunrise_end": format_time_of_day(active.sunrise_end),
            "sunset_start": format_time_of_day(active.sunset_start),
            "sunset_end": format_time_of_day(active.sunset_end),
        },
        "timezone": TIMEZONE or None,
    }


# ------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------

@configuration_router.get("", response_model=ConfigurationResponse)
async def get_configuration(at: Optional[datetime] = None):
    active = get_schedule()
    try:
        instant = at if at is not None else current_instant()
        logger.debug(f"Configuration request: at={instant.isoformat()}")
        return build_response(active, instant)
    except Exception as e:
        logger.error("Failed to evaluate configuration", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@configuration_router.get("/day")
async def get_day_curve(
    day: Optional[date] = Query(None, alias="date"),
    step_minutes: int = Query(15, ge=1, le=720),
):
    active = get_schedule()
    try:
        day = day or current_instant().date()
        logger.debug(f"Day curve request: date={day}, step_minutes={step_minutes}")

        points = [
            {
                "at": instant.isoformat(),
                "temperature": configuration.temperature,
                "brightness": configuration.brightness,
            }
            for instant, configuration in sample_day(active, day, timedelta(minutes=step_minutes), timezone)
        ]
        return {"date": day.isoformat(), "step_minutes": step_minutes, "points": points}
    except Exception as e:
        logger.error("Failed to sample day curve", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@configuration_router.post("/evaluate", response_model=ConfigurationResponse)
async def evaluate_schedule(req: EvaluateRequest):
    try:
        logger.debug(f"Ad-hoc evaluation: at={req.at.isoformat()}")
        return build_response(req.schedule, req.at)
    except Exception as e:
        logger.error("Failed to evaluate ad-hoc schedule", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


app.include_router(configuration_router)


def run():
    """Serve the API. Must run with ONE worker."""
    logger.info(f"Serving LightBulb flow API on {API_HOST}:{API_PORT}")
    uvicorn.run(app, host=API_HOST, port=API_PORT, workers=1)


if __name__ == "__main__":
    run()
