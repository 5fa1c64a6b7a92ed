"""Register pydantic settings classes and configure the keeper itself.

Registering a ``BaseSettings`` subclass stores an instance built from the
environment. ``KeeperSettings`` reads ``BEANKEEPER_*`` variables unless passed
explicitly with ``WithSettings``.
"""

from __future__ import annotations

from typing import Annotated

from pydantic_settings import BaseSettings, SettingsConfigDict

from beankeeper import Bean, Keeper, KeeperSettings, Name, WithSettings


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EXAMPLE_DB_")

    url: str = "sqlite:///example.db"


class Repository:
    settings: Annotated[DatabaseSettings, Bean("databaseSettings")]


def main() -> None:
    keeper = Keeper(WithSettings(KeeperSettings(check_types=True)))
    keeper.register(DatabaseSettings, Name("databaseSettings"))

    repository = Repository()
    keeper.register(repository, Name("repository"))

    print(f"url={repository.settings.url}")  # => url=sqlite:///example.db
    print(f"check_types={keeper.settings.check_types}")  # => check_types=True


if __name__ == "__main__":
    main()
