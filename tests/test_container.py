"""Tests for the dependency injection container."""

import pytest

from movie_pathways.adapters.planning import BeamSearchPlanner
from movie_pathways.adapters.storage import InMemoryStateRepository, JSONStateRepository
from movie_pathways.config import AppConfig, StorageConfig, reset_config
from movie_pathways.container import Container, get_container, reset_container
from movie_pathways.ports import ItineraryPlannerPort, StateRepositoryPort
from movie_pathways.services import PathwaysService


@pytest.fixture
def config(tmp_path):
    return AppConfig(storage=StorageConfig(data_dir=tmp_path))


class TestContainer:
    def test_unregistered_type_raises(self):
        with pytest.raises(KeyError):
            Container().resolve(StateRepositoryPort)

    def test_singleton_registration(self):
        container = Container()
        container.register(StateRepositoryPort, InMemoryStateRepository)

        assert container.resolve(StateRepositoryPort) is container.resolve(StateRepositoryPort)

    def test_factory_registration(self):
        container = Container()
        container.register(StateRepositoryPort, InMemoryStateRepository, singleton=False)

        assert container.resolve(StateRepositoryPort) is not container.resolve(
            StateRepositoryPort
        )

    def test_reregistering_drops_cached_instance(self):
        container = Container()
        container.register(StateRepositoryPort, InMemoryStateRepository)
        first = container.resolve(StateRepositoryPort)

        container.register(StateRepositoryPort, InMemoryStateRepository)

        assert container.resolve(StateRepositoryPort) is not first

    def test_clear_singletons(self):
        container = Container()
        container.register(StateRepositoryPort, InMemoryStateRepository)
        first = container.resolve(StateRepositoryPort)

        container.clear_singletons()

        assert container.is_registered(StateRepositoryPort)
        assert container.resolve(StateRepositoryPort) is not first

    def test_clear_all(self):
        container = Container()
        container.register(StateRepositoryPort, InMemoryStateRepository)
        container.clear_all()

        assert not container.is_registered(StateRepositoryPort)

    def test_default_bindings(self, config):
        container = Container.create_default(config)

        repository = container.resolve(StateRepositoryPort)
        planner = container.resolve(ItineraryPlannerPort)
        service = container.resolve(PathwaysService)

        assert isinstance(repository, JSONStateRepository)
        assert repository.config.data_dir == config.storage.data_dir
        assert isinstance(planner, BeamSearchPlanner)
        assert service.repository is repository
        assert service.planner is planner

    def test_default_service_persists_to_data_dir(self, config):
        service = Container.create_default(config).resolve(PathwaysService)

        service.add_movie("Akira", 124)

        assert config.storage.state_path.exists()

    def test_override_for_tests(self, config):
        container = Container.create_default(config)
        container.register(StateRepositoryPort, InMemoryStateRepository)

        service = container.resolve(PathwaysService)

        assert isinstance(service.repository, InMemoryStateRepository)


def test_global_container(monkeypatch, tmp_path):
    monkeypatch.setenv("MP_STORAGE_DATA_DIR", str(tmp_path))
    reset_config()
    reset_container()
    try:
        container = get_container()
        assert get_container() is container
        assert container.config.storage.data_dir == tmp_path
    finally:
        reset_container()
