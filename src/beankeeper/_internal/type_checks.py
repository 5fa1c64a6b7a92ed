from __future__ import annotations

import types
from typing import Annotated, Any, ClassVar, TypeGuard, TypeVar, Union, get_args, get_origin

from beankeeper.defaults import DEFAULT_PLAIN_VALUE_TYPES

# int is accepted where float is declared, int and float where complex is
_NUMERIC_PROMOTIONS: dict[type[Any], tuple[type[Any], ...]] = {
    float: (int,),
    complex: (int, float),
}


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_plain_value(candidate: object) -> bool:
    """Return true when candidate is stored as-is and never wired.

    Classes and instances of the builtin value and container types have no
    injection points of their own.
    """
    return isinstance(candidate, type) or isinstance(candidate, DEFAULT_PLAIN_VALUE_TYPES)


def is_class_var(annotation: Any) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def is_compatible(value: object, annotation: Any) -> bool:
    """Return whether ``value`` may be assigned to an attribute annotated ``annotation``.

    Annotations that cannot be checked at runtime (``Any``, type variables,
    string forward references, non-runtime protocols) accept every value.
    Numbers follow the typing numeric tower, and ``bool`` counts as ``int``.
    """
    if annotation is Any or isinstance(annotation, (TypeVar, str)):
        return True
    if annotation is None or annotation is type(None):
        return value is None

    origin = get_origin(annotation)
    if origin is Annotated:
        return is_compatible(value, get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return any(is_compatible(value, member) for member in get_args(annotation))
    if origin is not None:
        return is_compatible(value, origin)

    if not isinstance(annotation, type):
        return True
    if isinstance(value, _NUMERIC_PROMOTIONS.get(annotation, ())):
        return True
    try:
        return isinstance(value, annotation)
    except TypeError:
        # protocols without @runtime_checkable cannot be checked
        return True


def describe_annotation(annotation: Any) -> str:
    if is_runtime_class(annotation):
        return annotation.__qualname__
    return repr(annotation)


__all__ = [
    "describe_annotation",
    "is_class_var",
    "is_compatible",
    "is_plain_value",
    "is_runtime_class",
]
