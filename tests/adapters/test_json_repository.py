"""Tests for the JSON state repository adapter."""

import json
import os
from datetime import datetime

import pytest

from movie_pathways.adapters.storage import JSONStateRepository
from movie_pathways.config import StorageConfig
from movie_pathways.domain.errors import StateStoreError
from movie_pathways.domain.models import AppState, Movie, Settings, Showtime, Theater


DEFAULTS = Settings(trailer_leeway_mins=20, travel_mins=15, max_results=20, beam_width=200)


@pytest.fixture
def repository(tmp_path):
    return JSONStateRepository(StorageConfig(data_dir=tmp_path), default_settings=DEFAULTS)


def _write(repository, payload):
    path = repository.config.state_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), "utf-8")


class TestJSONStateRepository:
    """Test suite for JSONStateRepository."""

    def test_state_path_uses_state_key(self, tmp_path):
        config = StorageConfig(data_dir=tmp_path, state_key="custom")
        assert config.state_path == tmp_path / "custom.json"

    def test_missing_file_yields_defaults(self, repository):
        state = repository.load()
        assert state.is_empty
        assert state.settings == DEFAULTS

    def test_corrupt_file_yields_defaults(self, repository):
        _write(repository, "{not json")
        state = repository.load()
        assert state.is_empty
        assert state.settings == DEFAULTS

    def test_non_object_document_yields_defaults(self, repository):
        _write(repository, [1, 2, 3])
        assert repository.load().is_empty

    def test_save_then_load(self, repository):
        state = AppState(
            settings=Settings(trailer_leeway_mins=5, travel_mins=30, max_results=10, beam_width=400),
            movies=(Movie(id="mov_1", title="Amélie", runtime_mins=122, rank=2),),
            theaters=(Theater(id="the_1", name="Rex"),),
            showtimes=(
                Showtime(
                    id="sho_1",
                    movie_id="mov_1",
                    theater_id="the_1",
                    start_local="2024-05-01T19:00",
                ),
            ),
        )

        repository.save(state)

        assert repository.load() == state
        assert not repository.config.state_path.with_name(
            repository.config.state_path.name + ".tmp"
        ).exists()

    def test_datetime_start_keeps_seconds(self, repository):
        state = AppState(
            settings=DEFAULTS,
            showtimes=(
                Showtime(
                    id="sho_1",
                    movie_id="mov_1",
                    theater_id="the_1",
                    start_local=datetime(2024, 5, 1, 9, 5, 30),
                ),
            ),
        )

        repository.save(state)

        raw = json.loads(repository.config.state_path.read_text("utf-8"))
        assert raw["showtimes"][0]["start_local"] == "2024-05-01T09:05:30"
        assert repository.load().showtimes[0].start_local == "2024-05-01T09:05:30"

    def test_bad_entries_are_dropped(self, repository):
        _write(
            repository,
            {
                "movies": [
                    {"id": "mov_1", "title": "Ok", "runtime_mins": 90},
                    {"id": "mov_2", "title": "No runtime"},
                    {"id": 3, "title": "Numeric id", "runtime_mins": 90},
                    "garbage",
                ],
                "theaters": [{"id": "the_1", "name": "Rex"}, {"id": "the_2"}],
                "showtimes": [
                    {
                        "id": "sho_1",
                        "movie_id": "mov_1",
                        "theater_id": "the_1",
                        "start_local": "2024-05-01T10:00",
                    },
                    {"id": "sho_2", "movie_id": "mov_1"},
                ],
            },
        )

        state = repository.load()

        assert [m.id for m in state.movies] == ["mov_1"]
        assert state.movies[0].rank is None
        assert [t.id for t in state.theaters] == ["the_1"]
        assert [s.id for s in state.showtimes] == ["sho_1"]

    def test_non_finite_numbers_are_dropped(self, repository):
        _write(
            repository,
            '{"settings": {"beam_width": Infinity, "travel_mins": NaN, "max_results": 7},'
            ' "movies": ['
            '  {"id": "mov_1", "title": "Ok", "runtime_mins": 90, "rank": -Infinity},'
            '  {"id": "mov_2", "title": "Broken", "runtime_mins": NaN}'
            "]}",
        )

        state = repository.load()

        assert state.settings.beam_width == DEFAULTS.beam_width
        assert state.settings.travel_mins == DEFAULTS.travel_mins
        assert state.settings.max_results == 7
        assert [m.id for m in state.movies] == ["mov_1"]
        assert state.movies[0].rank is None

    def test_stored_settings_merge_over_defaults(self, repository):
        _write(repository, {"settings": {"travel_mins": 45, "beam_width": "wide"}})

        settings = repository.load().settings

        assert settings.travel_mins == 45
        assert settings.beam_width == DEFAULTS.beam_width
        assert settings.trailer_leeway_mins == DEFAULTS.trailer_leeway_mins

    def test_missing_collections_default_to_empty(self, repository):
        _write(repository, {"settings": {}, "movies": "nope"})
        assert repository.load().movies == ()

    def test_clear(self, repository):
        assert repository.clear() is False

        repository.save(AppState(settings=DEFAULTS))
        assert repository.config.state_path.exists()

        assert repository.clear() is True
        assert not repository.config.state_path.exists()

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignores directory permissions",
    )
    def test_unwritable_directory_raises(self, tmp_path):
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o500)
        repository = JSONStateRepository(StorageConfig(data_dir=locked), default_settings=DEFAULTS)
        try:
            with pytest.raises(StateStoreError) as exc_info:
                repository.save(AppState(settings=DEFAULTS))
            assert exc_info.value.file_path == str(repository.config.state_path)
            assert exc_info.value.cause is not None
        finally:
            locked.chmod(0o700)

    def test_save_error_when_data_dir_is_a_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", "utf-8")
        repository = JSONStateRepository(
            StorageConfig(data_dir=blocker / "nested"), default_settings=DEFAULTS
        )

        with pytest.raises(StateStoreError):
            repository.save(AppState(settings=DEFAULTS))
