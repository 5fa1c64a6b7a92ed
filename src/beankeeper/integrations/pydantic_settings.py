from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings

from beankeeper._internal.type_checks import is_runtime_class


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a pydantic settings model.

    beankeeper uses this integration when a settings *class* is registered:
    the class is instantiated with no arguments, so values come from the
    environment, and the instance is stored under the requested name.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` when ``candidate`` is a runtime class and subclasses
        ``pydantic_settings.BaseSettings``; otherwise ``False``.

    """
    if not is_runtime_class(candidate):
        return False
    return issubclass(candidate, BaseSettings)


def instantiate_settings(settings_class: type[Any]) -> Any:
    """Build a settings model from its environment sources."""
    return settings_class()


__all__ = [
    "instantiate_settings",
    "is_pydantic_settings_subclass",
]
