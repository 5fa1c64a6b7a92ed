"""Registration errors and the sealed phase.

Every failure derives from ``BeanKeeperError``. After ``seal()`` the keeper
only serves lookups and ``provide``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

from beankeeper import Bean, BeanKeeperError, Keeper, Name


class Cache:
    pass


class Queue:
    pass


class Worker:
    queue: Annotated[Queue, Bean("queue")]


def error_name(attempt: Callable[[], object]) -> str:
    try:
        attempt()
    except BeanKeeperError as error:
        return type(error).__name__
    return "ok"


def main() -> None:
    keeper = Keeper()
    keeper.register(Cache(), Name("cache"))

    print(error_name(lambda: keeper.register(Cache(), Name("cache"))))  # => BeanKeeperDuplicateNameError
    print(error_name(lambda: keeper.register(Cache(), Name(""))))  # => BeanKeeperInvalidNameError
    print(error_name(lambda: keeper.register(Worker(), Name("worker"))))  # => BeanKeeperDependencyNotRegisteredError

    keeper.register(Cache(), Name("queue"))
    print(error_name(lambda: keeper.register(Worker(), Name("worker"))))  # => BeanKeeperTypeMismatchError

    keeper.seal()
    print(error_name(lambda: keeper.register(Queue(), Name("queue2"))))  # => BeanKeeperSealedError
    print(error_name(lambda: keeper.provide(Worker())))  # => BeanKeeperTypeMismatchError


if __name__ == "__main__":
    main()
