from __future__ import annotations

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from beankeeper.exceptions import BeanKeeperInvalidSettingsError


class KeeperSettings(BaseSettings):
    """Runtime switches of a ``Keeper``, read from ``BEANKEEPER_*`` environment variables.

    Examples:
        .. code-block:: console

            $ BEANKEEPER_CHECK_TYPES=false python app.py

    """

    model_config = SettingsConfigDict(env_prefix="BEANKEEPER_", extra="ignore")

    check_types: bool = True
    """Check located beans against the declared type of the attribute they fill."""

    instantiate_settings: bool = True
    """Instantiate pydantic settings classes passed to ``register`` instead of storing the class."""


def load_settings() -> KeeperSettings:
    """Read ``KeeperSettings`` from the environment.

    Raises:
        BeanKeeperInvalidSettingsError: If a ``BEANKEEPER_*`` variable is malformed.

    """
    try:
        return KeeperSettings()
    except ValidationError as error:
        msg = f"Invalid BEANKEEPER_* environment: {error}"
        raise BeanKeeperInvalidSettingsError(msg) from error


__all__ = ["KeeperSettings", "load_settings"]
