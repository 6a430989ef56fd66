"""Shared fixtures for the Movie Pathways test suite."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta
from typing import Callable

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from movie_pathways.adapters.planning import BeamSearchPlanner
from movie_pathways.adapters.storage import InMemoryStateRepository
from movie_pathways.config import PlannerConfig, reset_config
from movie_pathways.domain.models import ScheduledShow
from movie_pathways.services import PathwaysService

DAY = datetime(2024, 5, 1)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Keep environment overrides from leaking between tests."""
    for key in list(os.environ):
        if key.startswith("MP_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_show() -> Callable[..., ScheduledShow]:
    """Build a scheduled show from clock times on a fixed day."""

    def _make(
        showtime_id: str,
        start: str,
        runtime: int,
        theater: str = "T1",
        movie: str = "",
    ) -> ScheduledShow:
        hours, minutes = map(int, start.split(":"))
        begin = DAY.replace(hour=hours, minute=minutes)
        return ScheduledShow(
            showtime_id=showtime_id,
            movie_id=movie or f"m_{showtime_id}",
            theater_id=theater,
            start=begin,
            end=begin + timedelta(minutes=runtime),
        )

    return _make


@pytest.fixture
def memory_repository() -> InMemoryStateRepository:
    return InMemoryStateRepository()


@pytest.fixture
def service(memory_repository) -> PathwaysService:
    config = PlannerConfig()
    return PathwaysService(
        repository=memory_repository,
        planner=BeamSearchPlanner(config),
        limits=config,
    )
