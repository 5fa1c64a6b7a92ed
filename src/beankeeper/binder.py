from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Final, Protocol

from beankeeper._internal.type_checks import describe_annotation, is_compatible, is_plain_value
from beankeeper.exceptions import (
    BeanKeeperDependencyNotRegisteredError,
    BeanKeeperTypeMismatchError,
)
from beankeeper.markers import Initializer
from beankeeper.wiring import Dependency, Wiring, WiringInspector

logger = logging.getLogger(__name__)

MISSING: Final = object()
"""Returned by ``Binder.resolve`` for an optional dependency that is not registered."""


class BeanLookup(Protocol):
    def find(self, name: str) -> Any | None: ...


class Binder:
    """Resolve and assign the named dependencies of one object.

    The binder does not own any beans; it reads them from a lookup (normally
    the ``Keeper`` that created it). Assignment is not transactional: when a
    dependency fails, attributes wired before it keep their new values.
    """

    def __init__(
        self,
        lookup: BeanLookup,
        *,
        check_types: bool = True,
        inspector: WiringInspector | None = None,
    ) -> None:
        self._lookup = lookup
        self._check_types = check_types
        self._inspector = inspector or WiringInspector()

    def bind(self, target: object, dependencies: Iterable[Dependency] | None = None) -> None:
        """Wire ``target`` and run its ``after_property_set`` hook.

        Args:
            target: Object instance whose attributes receive the beans.
            dependencies: Explicit injection points. When omitted they are
                inferred from ``Bean`` markers on ``type(target)``.

        Raises:
            BeanKeeperTypeMismatchError: If ``target`` cannot be wired or a
                located bean does not fit its attribute.
            BeanKeeperDependencyNotRegisteredError: If a required bean is absent.
            BeanKeeperInvalidWiringError: If the wiring cannot be determined.

        """
        self._validate_target(target)
        wiring = self.wiring_for(target, dependencies)

        for dependency in wiring.dependencies:
            value = self.resolve(dependency, owner=wiring.owner)
            if value is MISSING:
                continue
            dependency.assign(target, value)

        if isinstance(target, Initializer):
            target.after_property_set()

    def wiring_for(self, target: object, dependencies: Iterable[Dependency] | None = None) -> Wiring:
        if dependencies is not None:
            return Wiring.explicit(type(target), dependencies)
        return self._inspector.inspect(type(target))

    def resolve(self, dependency: Dependency, *, owner: str) -> Any:
        """Look up and type-check the bean for a single injection point.

        Returns ``MISSING`` when an optional dependency is not registered.
        """
        value = self._lookup.find(dependency.name)
        if value is None:
            if dependency.optional:
                logger.debug(
                    "Skipping optional bean %r for %s.%s: not registered",
                    dependency.name,
                    owner,
                    dependency.field,
                )
                return MISSING
            raise BeanKeeperDependencyNotRegisteredError(
                dependency.name,
                owner=owner,
                field=dependency.field,
            )

        if self._check_types and not is_compatible(value, dependency.annotation):
            msg = (
                f"Bean {dependency.name!r} of type {type(value).__qualname__} does not suit "
                f"{owner}.{dependency.field} declared as {describe_annotation(dependency.annotation)}."
            )
            raise BeanKeeperTypeMismatchError(msg)
        return value

    @staticmethod
    def _validate_target(target: object) -> None:
        if target is None:
            msg = "can't provide None"
            raise BeanKeeperTypeMismatchError(msg)
        if is_plain_value(target):
            msg = (
                "must provide an object instance to wire, "
                f"got {target!r} (type {type(target).__qualname__})"
            )
            raise BeanKeeperTypeMismatchError(msg)


__all__ = [
    "MISSING",
    "BeanLookup",
    "Binder",
]
