from __future__ import annotations

import logging
from typing import Any

from typing_extensions import Self

from beankeeper._internal.type_checks import describe_annotation, is_compatible, is_plain_value
from beankeeper.binder import Binder
from beankeeper.exceptions import (
    BeanKeeperDuplicateNameError,
    BeanKeeperSealedError,
    BeanKeeperTypeMismatchError,
)
from beankeeper.integrations.pydantic_settings import (
    instantiate_settings,
    is_pydantic_settings_subclass,
)
from beankeeper.options import Option, RegisterOption, RegisterOptions
from beankeeper.settings import KeeperSettings, load_settings

logger = logging.getLogger(__name__)


class Keeper:
    """Keep named beans and wire their named dependencies on registration.

    A keeper is an application-level context; in most applications exactly one
    is built during startup. Registration is expected to happen from a single
    thread before the application starts serving, after which ``seal()`` turns
    the keeper read-only. No locking is done.

    Examples:
        .. code-block:: python

            keeper = Keeper()
            keeper.register(HelloSrv(), Name("helloService"))
            keeper.register(HelloCtl(), Name("helloCtl"))

            keeper.find("helloCtl").hello()

    """

    def __init__(self, *options: Option) -> None:
        """Build an empty keeper.

        Args:
            *options: Construction options. Without ``WithSettings`` the
                settings are read from ``BEANKEEPER_*`` environment variables.

        Raises:
            BeanKeeperInvalidSettingsError: If no ``WithSettings`` was given and
                a ``BEANKEEPER_*`` variable is malformed.

        """
        self._beans: dict[str, Any] = {}
        self._sealed = False
        self._settings: KeeperSettings | None = None
        for option in options:
            option.apply_option(self)
        self._binder = Binder(self, check_types=self.settings.check_types)

    def __contains__(self, name: object) -> bool:
        return name in self._beans

    def __len__(self) -> int:
        return len(self._beans)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(beans={sorted(self._beans)!r}, sealed={self._sealed})"

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def settings(self) -> KeeperSettings:
        """Settings given by ``WithSettings``, else loaded from the environment once."""
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    @settings.setter
    def settings(self, settings: KeeperSettings) -> None:
        self._settings = settings

    def find(self, name: str) -> Any | None:
        """Return the bean registered under ``name``, or ``None``."""
        return self._beans.get(name)

    def all(self) -> dict[str, Any]:
        """Return a copy of the name to bean mapping."""
        return dict(self._beans)

    def provide(self, target: object, *options: RegisterOption) -> None:
        """Wire ``target``'s dependencies without registering it.

        Use it for composition roots and other objects that need beans but
        should not be discoverable by name. Only ``Wire(...)`` is honored among
        ``options``.

        Raises:
            BeanKeeperTypeMismatchError: If ``target`` is ``None``, a class, or
                a plain value, or a located bean does not fit its attribute.
            BeanKeeperDependencyNotRegisteredError: If a required bean is absent.

        """
        collected = RegisterOptions.collect(options)
        self._binder.bind(target, collected.dependencies)
        logger.debug("Provided dependencies to %s", type(target).__qualname__)

    def register(self, instance: Any, *options: RegisterOption) -> None:
        """Wire ``instance`` and store it under the name given by ``Name(...)``.

        Objects are wired before they are stored; plain values (numbers,
        strings, builtin containers, classes) are stored as they are. Nothing
        is stored when wiring fails, but attributes assigned before the failure
        keep their values.

        Args:
            instance: Bean to register.
            *options: ``Name`` (required), ``Provides`` and ``Wire``.

        Raises:
            BeanKeeperSealedError: If the keeper was sealed.
            BeanKeeperInvalidNameError: If the name is empty or malformed.
            BeanKeeperDuplicateNameError: If the name is already taken.
            BeanKeeperTypeMismatchError: If ``instance`` is ``None`` or misses a
                ``Provides`` capability, or a dependency does not fit.
            BeanKeeperDependencyNotRegisteredError: If a required bean is absent.

        """
        if self._sealed:
            msg = f"cannot register {type(instance).__qualname__}: keeper is sealed"
            raise BeanKeeperSealedError(msg)

        collected = RegisterOptions.collect(options)
        collected.validate()
        name = collected.name

        if instance is None:
            msg = f"can't register None as bean {name!r}"
            raise BeanKeeperTypeMismatchError(msg)
        if name in self._beans:
            raise BeanKeeperDuplicateNameError(name, instance)

        if self.settings.instantiate_settings and is_pydantic_settings_subclass(instance):
            instance = instantiate_settings(instance)

        self._check_provides(name, instance, collected.provides)

        if not is_plain_value(instance):
            self._binder.bind(instance, collected.dependencies)

        self._beans[name] = instance
        logger.debug("Registered bean %r (%s)", name, type(instance).__qualname__)

    def seal(self) -> Self:
        """End the build phase; later ``register`` calls raise ``BeanKeeperSealedError``."""
        self._sealed = True
        logger.debug("Keeper sealed with %d bean(s)", len(self._beans))
        return self

    @staticmethod
    def _check_provides(name: str, instance: Any, capabilities: tuple[Any, ...]) -> None:
        for capability in capabilities:
            if not is_compatible(instance, capability):
                msg = (
                    f"Bean {name!r} of type {type(instance).__qualname__} "
                    f"does not provide {describe_annotation(capability)}."
                )
                raise BeanKeeperTypeMismatchError(msg)


__all__ = ["Keeper"]
