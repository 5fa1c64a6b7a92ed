from __future__ import annotations

from typing import Any


class BeanKeeperError(Exception):
    """Represent a base class for all beankeeper-specific failures.

    Catch this type when you want to handle any beankeeper error path without
    matching each concrete exception class individually.
    """


class BeanKeeperInvalidNameError(BeanKeeperError):
    """Signal an empty or malformed bean name.

    Raised by ``Keeper.register`` before anything else is inspected, and by
    ``Bean``/``Dependency`` when a dependency tag names a bean that could never
    be registered.

    Names must be non-empty strings and cannot contain backquotes.
    """


class BeanKeeperDuplicateNameError(BeanKeeperError):
    """Signal registration under a name that is already taken.

    The registry keeps the first instance unchanged. Pick a different
    ``Name(...)`` for the second bean.
    """

    def __init__(self, name: str, instance: Any) -> None:
        self.name = name
        self.instance = instance
        super().__init__(
            f"Bean name {name!r} is already registered; "
            f"cannot register {type(instance).__qualname__} under it.",
        )


class BeanKeeperTypeMismatchError(BeanKeeperError):
    """Signal a value whose type does not fit where it is used.

    Raised when ``provide``/``register`` receive ``None`` or a value that
    cannot be wired, when a registered bean does not satisfy its
    ``Provides(...)`` capabilities, and when a located dependency is not
    compatible with the declared type of the attribute it is injected into.
    """


class BeanKeeperDependencyNotRegisteredError(BeanKeeperError):
    """Signal that a required dependency name has no registered bean.

    Typical fixes include registering the dependency before its consumers, or
    marking the attribute ``Bean("name", optional=True)`` when it may be absent.
    """

    def __init__(self, name: str, owner: str, field: str) -> None:
        self.name = name
        self.owner = owner
        self.field = field
        super().__init__(
            f"Failed to load bean {name!r} required by {owner}.{field}: it is not registered.",
        )


class BeanKeeperInvalidWiringError(BeanKeeperError):
    """Signal an invalid wiring description.

    Raised when class annotations cannot be evaluated while looking for
    dependency markers, when a dependency tag string is malformed, or when an
    explicit ``Wire(...)`` lists the same attribute twice.
    """


class BeanKeeperSealedError(BeanKeeperError):
    """Signal registration after the keeper was sealed.

    ``Keeper.seal()`` ends the build phase. Lookups and ``provide`` keep
    working; ``register`` does not.
    """


class BeanKeeperInvalidSettingsError(BeanKeeperError):
    """Signal that keeper settings could not be loaded from the environment.

    Only raised when no ``WithSettings(...)`` option was given.
    """
