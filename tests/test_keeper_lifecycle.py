"""Tests for lifecycle hooks, provide, sealing and registration options."""

from dataclasses import dataclass, field
from typing import Annotated, Any, Protocol, runtime_checkable

import pytest

from beankeeper import (
    Bean,
    BeanKeeperDependencyNotRegisteredError,
    BeanKeeperSealedError,
    BeanKeeperTypeMismatchError,
    Dependency,
    Keeper,
    Name,
    Provides,
    Wire,
)


class Database:
    pass


class Cache:
    pass


class Repository:
    database: Annotated[Database, Bean("database")]
    cache: Annotated[Cache, Bean("cache")]

    def __init__(self) -> None:
        self.hook_calls = 0
        self.seen_at_hook: tuple[Any, Any] | None = None

    def after_property_set(self) -> None:
        self.hook_calls += 1
        self.seen_at_hook = (self.database, self.cache)


class PartiallyWired:
    database: Annotated[Database, Bean("database")]
    missing: Annotated[Cache, Bean("missing")]
    cache: Annotated[Cache, Bean("cache")]

    def __init__(self) -> None:
        self.hook_calls = 0

    def after_property_set(self) -> None:
        self.hook_calls += 1


class BaseService:
    database: Annotated[Database, Bean("database")]


class DerivedService(BaseService):
    cache: Annotated[Cache, Bean("cache")]


@dataclass(frozen=True)
class FrozenService:
    database: Annotated[Database | None, Bean("database")] = field(default=None)


class GuardedService:
    _database: Annotated[Database, Bean("database")]

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{name} is read-only"
        raise AttributeError(msg)


class SlottedService:
    __slots__ = ("database",)

    database: Annotated[Database, Bean("database")]


class CompositionRoot:
    repository: Annotated[Repository, Bean("repository")]
    cache: Annotated[Cache | None, Bean("cache", optional=True)] = None


class PlainController:
    def __init__(self) -> None:
        self.calls: list[object] = []
        self.database: Database | None = None

    def use_database(self, database: Database) -> None:
        self.calls.append(database)
        self.database = database


@runtime_checkable
class Closer(Protocol):
    def close(self) -> None: ...


class ClosingResource:
    def __init__(self) -> None:
        self.hook_calls = 0

    def close(self) -> None:
        pass

    def after_property_set(self) -> None:
        self.hook_calls += 1


class NonClosingResource:
    def __init__(self) -> None:
        self.hook_calls = 0

    def after_property_set(self) -> None:
        self.hook_calls += 1


@pytest.fixture()
def database() -> Database:
    return Database()


@pytest.fixture()
def cache() -> Cache:
    return Cache()


@pytest.fixture()
def wired_keeper(keeper: Keeper, database: Database, cache: Cache) -> Keeper:
    keeper.register(database, Name("database"))
    keeper.register(cache, Name("cache"))
    return keeper


class TestLifecycleHook:
    def test_hook_runs_once_after_all_dependencies(
        self,
        wired_keeper: Keeper,
        database: Database,
        cache: Cache,
    ) -> None:
        repository = Repository()

        wired_keeper.register(repository, Name("repository"))

        assert repository.hook_calls == 1
        assert repository.seen_at_hook == (database, cache)

    def test_hook_is_not_called_when_binding_fails(self, wired_keeper: Keeper) -> None:
        target = PartiallyWired()

        with pytest.raises(BeanKeeperDependencyNotRegisteredError):
            wired_keeper.register(target, Name("partial"))

        assert target.hook_calls == 0

    def test_failed_binding_keeps_earlier_assignments(
        self,
        wired_keeper: Keeper,
        database: Database,
    ) -> None:
        target = PartiallyWired()

        with pytest.raises(BeanKeeperDependencyNotRegisteredError):
            wired_keeper.register(target, Name("partial"))

        assert target.database is database
        assert not hasattr(target, "cache")
        assert "partial" not in wired_keeper


class TestAttributeAccess:
    def test_inherited_dependencies_are_wired(
        self,
        wired_keeper: Keeper,
        database: Database,
        cache: Cache,
    ) -> None:
        service = DerivedService()

        wired_keeper.register(service, Name("service"))

        assert service.database is database
        assert service.cache is cache

    def test_frozen_dataclass_is_wired(self, wired_keeper: Keeper, database: Database) -> None:
        service = FrozenService()

        wired_keeper.register(service, Name("service"))

        assert service.database is database

    def test_guarded_setattr_is_bypassed(self, wired_keeper: Keeper, database: Database) -> None:
        service = GuardedService()

        wired_keeper.register(service, Name("service"))

        assert service._database is database

    def test_slotted_class_is_wired(self, wired_keeper: Keeper, database: Database) -> None:
        service = SlottedService()

        wired_keeper.register(service, Name("service"))

        assert service.database is database


class TestProvide:
    def test_provide_wires_without_registering(
        self,
        wired_keeper: Keeper,
        cache: Cache,
    ) -> None:
        repository = Repository()
        wired_keeper.register(repository, Name("repository"))
        root = CompositionRoot()
        names_before = set(wired_keeper.all())

        wired_keeper.provide(root)

        assert root.repository is repository
        assert root.cache is cache
        assert set(wired_keeper.all()) == names_before

    def test_provide_missing_required_dependency_fails(self, keeper: Keeper) -> None:
        with pytest.raises(BeanKeeperDependencyNotRegisteredError, match="repository"):
            keeper.provide(CompositionRoot())

    def test_provide_runs_hook_once_after_wiring(
        self,
        wired_keeper: Keeper,
        database: Database,
        cache: Cache,
    ) -> None:
        repository = Repository()

        wired_keeper.provide(repository)

        assert repository.hook_calls == 1
        assert repository.seen_at_hook == (database, cache)
        assert "repository" not in wired_keeper

    def test_failed_provide_skips_hook(self, wired_keeper: Keeper) -> None:
        target = PartiallyWired()

        with pytest.raises(BeanKeeperDependencyNotRegisteredError, match="missing"):
            wired_keeper.provide(target)

        assert target.hook_calls == 0

    @pytest.mark.parametrize("target", [None, 42, "text", CompositionRoot])
    def test_provide_rejects_non_instances(self, keeper: Keeper, target: object) -> None:
        with pytest.raises(BeanKeeperTypeMismatchError):
            keeper.provide(target)


class TestSeal:
    def test_register_after_seal_fails(self, wired_keeper: Keeper) -> None:
        assert wired_keeper.seal() is wired_keeper
        assert wired_keeper.sealed

        with pytest.raises(BeanKeeperSealedError):
            wired_keeper.register(Repository(), Name("repository"))

        assert "repository" not in wired_keeper

    def test_reads_and_provide_work_after_seal(
        self,
        wired_keeper: Keeper,
        database: Database,
    ) -> None:
        wired_keeper.seal()
        service = BaseService()

        wired_keeper.provide(service)

        assert wired_keeper.find("database") is database
        assert service.database is database
        assert len(wired_keeper.all()) == 2


class TestProvidesOption:
    def test_capable_bean_is_registered(self, keeper: Keeper) -> None:
        resource = ClosingResource()

        keeper.register(resource, Name("resource"), Provides(Closer))

        assert keeper.find("resource") is resource

    def test_incapable_bean_is_rejected_before_wiring(self, keeper: Keeper) -> None:
        resource = NonClosingResource()

        with pytest.raises(BeanKeeperTypeMismatchError, match="Closer"):
            keeper.register(resource, Name("resource"), Provides(Closer))

        assert resource.hook_calls == 0
        assert "resource" not in keeper

    def test_all_capabilities_must_hold(self, keeper: Keeper) -> None:
        with pytest.raises(BeanKeeperTypeMismatchError, match="Database"):
            keeper.register(ClosingResource(), Name("resource"), Provides(Closer, Database))


class TestWireOption:
    def test_explicit_dependencies_replace_annotations(
        self,
        wired_keeper: Keeper,
        database: Database,
    ) -> None:
        controller = PlainController()

        wired_keeper.register(
            controller,
            Name("controller"),
            Wire(Dependency("database", "database", annotation=Database)),
        )

        assert controller.database is database
        assert controller.calls == []

    def test_explicit_setter_is_used(self, wired_keeper: Keeper, database: Database) -> None:
        controller = PlainController()

        wired_keeper.provide(
            controller,
            Wire(
                Dependency(
                    "database",
                    "database",
                    setter=PlainController.use_database,
                ),
            ),
        )

        assert controller.calls == [database]

    def test_explicit_optional_dependency_may_be_missing(self, keeper: Keeper) -> None:
        controller = PlainController()

        keeper.register(
            controller,
            Name("controller"),
            Wire(Dependency("database", "database", optional=True)),
        )

        assert controller.database is None

    def test_explicit_dependencies_are_type_checked(self, wired_keeper: Keeper) -> None:
        with pytest.raises(BeanKeeperTypeMismatchError, match="PlainController.database"):
            wired_keeper.provide(
                PlainController(),
                Wire(Dependency("database", "cache", annotation=Database)),
            )
