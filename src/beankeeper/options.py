from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from beankeeper.markers import validate_bean_name
from beankeeper.wiring import Dependency

if TYPE_CHECKING:
    from beankeeper.keeper import Keeper
    from beankeeper.settings import KeeperSettings


class Option(Protocol):
    """Configure a ``Keeper`` at construction time."""

    def apply_option(self, keeper: Keeper) -> None: ...


class RegisterOption(Protocol):
    """Modify the default behavior of ``Keeper.register`` and ``Keeper.provide``."""

    def apply_register_option(self, options: RegisterOptions) -> None: ...


@dataclass(slots=True)
class RegisterOptions:
    """Collected registration options for a single ``register``/``provide`` call."""

    name: str = ""
    provides: tuple[Any, ...] = ()
    dependencies: tuple[Dependency, ...] | None = None

    @classmethod
    def collect(cls, options: tuple[RegisterOption, ...]) -> RegisterOptions:
        collected = cls()
        for option in options:
            option.apply_register_option(collected)
        return collected

    def validate(self) -> None:
        validate_bean_name(self.name)


@dataclass(frozen=True, slots=True)
class Name:
    """Register the bean under the given name.

    Given,

    .. code-block:: python

        class Connection: ...

    the following provides two connections to the keeper, one under the name
    ``"ro"`` and the other under ``"rw"``:

    .. code-block:: python

        keeper.register(Connection(), Name("ro"))
        keeper.register(Connection(), Name("rw"))

    """

    value: str

    def apply_register_option(self, options: RegisterOptions) -> None:
        options.name = self.value


@dataclass(frozen=True, slots=True, init=False)
class Provides:
    """Require the bean to satisfy every listed capability at registration time.

    Capabilities are classes or ``@runtime_checkable`` protocols. A bean that
    fails the check is rejected before any wiring happens, so consumers never
    receive an instance that lacks what they rely on.
    """

    capabilities: tuple[Any, ...]

    def __init__(self, *capabilities: Any) -> None:
        object.__setattr__(self, "capabilities", capabilities)

    def apply_register_option(self, options: RegisterOptions) -> None:
        options.provides = (*options.provides, *self.capabilities)


@dataclass(frozen=True, slots=True, init=False)
class Wire:
    """Wire the bean from an explicit list of ``Dependency`` entries.

    Replaces annotation inspection for this call, so the bean type does not
    need ``Bean`` markers at all:

    .. code-block:: python

        keeper.register(
            HelloCtl(),
            Name("helloCtl"),
            Wire(Dependency("hello_srv", "helloService", setter=HelloCtl.set_hello_srv)),
        )

    """

    dependencies: tuple[Dependency, ...]

    def __init__(self, *dependencies: Dependency) -> None:
        object.__setattr__(self, "dependencies", dependencies)

    def apply_register_option(self, options: RegisterOptions) -> None:
        options.dependencies = (*(options.dependencies or ()), *self.dependencies)


@dataclass(frozen=True, slots=True)
class WithSettings:
    """Configure the keeper from an explicit ``KeeperSettings`` instead of the environment."""

    settings: KeeperSettings

    def apply_option(self, keeper: Keeper) -> None:
        keeper.settings = self.settings


__all__ = [
    "Name",
    "Option",
    "Provides",
    "RegisterOption",
    "RegisterOptions",
    "Wire",
    "WithSettings",
]
