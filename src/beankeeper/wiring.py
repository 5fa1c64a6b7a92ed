from __future__ import annotations

import inspect
import logging
import sys
import weakref
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, get_type_hints

from beankeeper._internal.type_checks import is_class_var
from beankeeper.exceptions import BeanKeeperInvalidWiringError
from beankeeper.markers import Bean, bean_marker_of, strip_bean_annotation, validate_bean_name

logger = logging.getLogger(__name__)

Setter = Callable[[Any, Any], None]
"""Assign a resolved dependency: ``setter(target, value)``."""


@dataclass(frozen=True, slots=True)
class Dependency:
    """Describe one injection point: which attribute receives which bean.

    ``annotation`` is the declared type the located bean is checked against.
    ``setter`` replaces the default ``object.__setattr__`` assignment, e.g. to
    route the value through a public setter method.
    """

    field: str
    name: str
    optional: bool = False
    annotation: Any = Any
    setter: Setter | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.field, str) or not self.field:
            msg = f"Dependency field must be a non-empty string, got {self.field!r}."
            raise BeanKeeperInvalidWiringError(msg)
        validate_bean_name(self.name)

    def assign(self, target: object, value: object) -> None:
        if self.setter is not None:
            self.setter(target, value)
            return
        # bypasses frozen dataclasses and guarded __setattr__ alike
        object.__setattr__(target, self.field, value)


@dataclass(frozen=True, slots=True)
class Wiring:
    """Ordered injection points of one bean type."""

    owner: str
    dependencies: tuple[Dependency, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for dependency in self.dependencies:
            if dependency.field in seen:
                msg = f"Attribute {self.owner}.{dependency.field} is wired more than once."
                raise BeanKeeperInvalidWiringError(msg)
            seen.add(dependency.field)

    @classmethod
    def explicit(cls, owner: type[Any], dependencies: Iterable[Dependency]) -> Wiring:
        return cls(owner=owner.__qualname__, dependencies=tuple(dependencies))


class WiringInspector:
    """Derive ``Wiring`` from ``Annotated[T, Bean(...)]`` class annotations.

    Results are cached per class; the cache holds classes weakly.
    """

    def __init__(self) -> None:
        self._cache: weakref.WeakKeyDictionary[type[Any], Wiring] = weakref.WeakKeyDictionary()

    def inspect(self, bean_type: type[Any]) -> Wiring:
        try:
            return self._cache[bean_type]
        except KeyError:
            pass
        wiring = Wiring(
            owner=bean_type.__qualname__,
            dependencies=tuple(self._extract_dependencies(bean_type)),
        )
        self._cache[bean_type] = wiring
        logger.debug(
            "Inspected wiring of %s: %s",
            bean_type.__qualname__,
            [dependency.field for dependency in wiring.dependencies],
        )
        return wiring

    def _extract_dependencies(self, bean_type: type[Any]) -> list[Dependency]:
        dependencies: list[Dependency] = []
        for field_name, annotation in self._annotations(bean_type).items():
            if is_class_var(annotation):
                continue
            marker = bean_marker_of(annotation)
            if marker is None:
                continue
            dependencies.append(
                Dependency(
                    field=field_name,
                    name=marker.name,
                    optional=marker.optional,
                    annotation=strip_bean_annotation(annotation),
                ),
            )
        return dependencies

    def _annotations(self, bean_type: type[Any]) -> dict[str, Any]:
        try:
            return get_type_hints(bean_type, include_extras=True)
        except (AttributeError, NameError, SyntaxError, TypeError) as error:
            logger.debug(
                "Falling back to per-class annotations of %s: %s",
                bean_type.__qualname__,
                error,
            )

        annotations: dict[str, Any] = {}
        for klass in reversed(bean_type.__mro__):
            annotations.update(self._own_annotations(klass))
        return annotations

    def _own_annotations(self, klass: type[Any]) -> dict[str, Any]:
        """Evaluate ``klass``'s own annotations one by one.

        An annotation that cannot be evaluated is skipped, unless its text
        refers to the ``Bean`` marker under any name the module binds it to.
        """
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        marker_names = {Bean.__name__} | {
            name for name, value in globalns.items() if value is Bean
        }

        annotations: dict[str, Any] = {}
        for field_name, annotation in inspect.get_annotations(klass).items():
            if not isinstance(annotation, str):
                annotations[field_name] = annotation
                continue
            try:
                annotations[field_name] = eval(annotation, globalns, localns)  # noqa: S307
            except (AttributeError, NameError, SyntaxError, TypeError) as error:
                if any(name in annotation for name in marker_names):
                    msg = (
                        f"Cannot evaluate annotation {klass.__qualname__}.{field_name} "
                        f"({annotation!r}): {error}"
                    )
                    raise BeanKeeperInvalidWiringError(msg) from error
                logger.debug(
                    "Skipping unevaluable annotation %s.%s: %s",
                    klass.__qualname__,
                    field_name,
                    error,
                )
        return annotations


__all__ = [
    "Dependency",
    "Setter",
    "Wiring",
    "WiringInspector",
]
