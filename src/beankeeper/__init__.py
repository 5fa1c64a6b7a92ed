from beankeeper.binder import Binder
from beankeeper.exceptions import (
    BeanKeeperDependencyNotRegisteredError,
    BeanKeeperDuplicateNameError,
    BeanKeeperError,
    BeanKeeperInvalidNameError,
    BeanKeeperInvalidSettingsError,
    BeanKeeperInvalidWiringError,
    BeanKeeperSealedError,
    BeanKeeperTypeMismatchError,
)
from beankeeper.keeper import Keeper
from beankeeper.markers import Bean, Initializer
from beankeeper.options import Name, Option, Provides, RegisterOption, Wire, WithSettings
from beankeeper.settings import KeeperSettings
from beankeeper.wiring import Dependency, Wiring

__all__ = [
    "Bean",
    "BeanKeeperDependencyNotRegisteredError",
    "BeanKeeperDuplicateNameError",
    "BeanKeeperError",
    "BeanKeeperInvalidNameError",
    "BeanKeeperInvalidSettingsError",
    "BeanKeeperInvalidWiringError",
    "BeanKeeperSealedError",
    "BeanKeeperTypeMismatchError",
    "Binder",
    "Dependency",
    "Initializer",
    "Keeper",
    "KeeperSettings",
    "Name",
    "Option",
    "Provides",
    "RegisterOption",
    "Wire",
    "Wiring",
    "WithSettings",
]
