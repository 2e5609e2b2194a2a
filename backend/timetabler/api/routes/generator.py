from __future__ import annotations

import logging
from time import perf_counter

from fastapi import APIRouter

from timetabler.core.config import get_settings
from timetabler.schemas.generator import (
    CandidateSchedule,
    GenerateTimetableRequest,
    GenerateTimetableResponse,
    GenerationSettings,
)
from timetabler.services.timetable_generator import TimetableGenerator

router = APIRouter()

logger = logging.getLogger(__name__)


def default_generation_settings() -> GenerationSettings:
    return GenerationSettings()


def _shortfall_warnings(candidates: list[CandidateSchedule]) -> list[str]:
    warnings: list[str] = []
    for candidate in candidates:
        for notice in candidate.shortfalls:
            warnings.append(
                f"{candidate.name}: scheduled {notice.achieved}/{notice.required} sessions "
                f"for {notice.subject_name} ({notice.missing} short)"
            )
    return warnings


@router.get("/timetable/generation-settings", response_model=GenerationSettings)
def get_generation_settings() -> GenerationSettings:
    return default_generation_settings()


@router.post("/timetable/generate", response_model=GenerateTimetableResponse)
def generate_timetable(payload: GenerateTimetableRequest) -> GenerateTimetableResponse:
    started = perf_counter()
    config = payload.config
    settings_used = payload.settings_override or default_generation_settings()
    logger.info(
        "TIMETABLE GENERATION START | name=%s | department=%s | semester=%s | subjects=%s | seed=%s",
        config.name,
        config.department,
        config.semester,
        len(config.subjects),
        settings_used.random_seed,
    )
    try:
        generator = TimetableGenerator(
            config,
            settings_used,
            max_classes_per_day=get_settings().max_classes_per_day,
        )
        candidates = generator.generate()
        warnings = _shortfall_warnings(candidates)
        if warnings:
            logger.warning(
                "TIMETABLE GENERATION SHORTFALL | name=%s | shortfalls=%s",
                config.name,
                len(warnings),
            )

        runtime_ms = int((perf_counter() - started) * 1000)
        logger.info(
            "TIMETABLE GENERATION COMPLETE | name=%s | candidates=%s | best_score=%s | runtime_ms=%s",
            config.name,
            len(candidates),
            max((item.score for item in candidates), default=0),
            runtime_ms,
        )
        return GenerateTimetableResponse(
            candidates=candidates,
            days=list(generator.grid.days),
            time_slots=list(generator.grid.rows),
            settings_used=settings_used,
            runtime_ms=runtime_ms,
            warnings=warnings,
        )
    except Exception:
        elapsed_ms = int((perf_counter() - started) * 1000)
        logger.exception(
            "TIMETABLE GENERATION FAILED | name=%s | wall_ms=%s",
            config.name,
            elapsed_ms,
        )
        raise
