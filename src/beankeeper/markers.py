from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Protocol, get_args, get_origin, runtime_checkable

from typing_extensions import Self

from beankeeper.defaults import BACKQUOTE, OPTIONAL_MODIFIER
from beankeeper.exceptions import BeanKeeperInvalidNameError, BeanKeeperInvalidWiringError

_ANNOTATED_MARKER_MIN_ARGS = 2


def validate_bean_name(name: object) -> None:
    """Raise ``BeanKeeperInvalidNameError`` unless ``name`` is usable as a registry key."""
    if not isinstance(name, str):
        msg = f"Bean name must be a string, got {name!r} (type {type(name).__qualname__})."
        raise BeanKeeperInvalidNameError(msg)
    if not name:
        msg = "cannot use empty name"
        raise BeanKeeperInvalidNameError(msg)
    if BACKQUOTE in name:
        msg = f"invalid Name({name!r}): names cannot contain backquotes"
        raise BeanKeeperInvalidNameError(msg)


@dataclass(frozen=True, slots=True)
class Bean:
    """Mark a class attribute as an injection point for the bean called ``name``.

    Attach ``Bean`` metadata to ``typing.Annotated`` on a class-level
    annotation. Attributes without the marker are never touched.

    Examples:
        .. code-block:: python

            from typing import Annotated


            class HelloCtl:
                _hello_srv: Annotated[HelloSrv, Bean("helloService")]
                _audit: Annotated[AuditLog | None, Bean("audit", optional=True)] = None

    """

    name: str
    optional: bool = False

    def __post_init__(self) -> None:
        validate_bean_name(self.name)

    @classmethod
    def parse(cls, tag: str) -> Self:
        """Build a marker from the ``name[,optional]`` tag form.

        Examples:
            .. code-block:: python

                Bean.parse("helloService")           # Bean("helloService")
                Bean.parse("helloService,optional")  # Bean("helloService", optional=True)

        """
        name, *modifiers = (part.strip() for part in tag.split(","))
        unknown = [modifier for modifier in modifiers if modifier != OPTIONAL_MODIFIER]
        if unknown:
            msg = f"Unknown modifier(s) {unknown!r} in dependency tag {tag!r}."
            raise BeanKeeperInvalidWiringError(msg)
        return cls(name=name, optional=bool(modifiers))


@runtime_checkable
class Initializer(Protocol):
    """Lifecycle hook invoked once, right after all of a bean's dependencies are set."""

    def after_property_set(self) -> None: ...


def bean_marker_of(annotation: Any) -> Bean | None:
    """Return the ``Bean`` marker attached to ``annotation``, if any.

    Only top-level ``Annotated`` metadata is considered. When several markers
    are attached the last one wins.
    """
    if get_origin(annotation) is not Annotated:
        return None
    annotation_args = get_args(annotation)
    if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
        return None
    markers = [item for item in annotation_args[1:] if isinstance(item, Bean)]
    if not markers:
        return None
    return markers[-1]


def strip_bean_annotation(annotation: Any) -> Any:
    """Return the declared type of an ``Annotated[T, Bean(...)]`` annotation."""
    if get_origin(annotation) is not Annotated:
        return annotation
    return get_args(annotation)[0]


__all__ = [
    "Bean",
    "Initializer",
    "bean_marker_of",
    "strip_bean_annotation",
    "validate_bean_name",
]
