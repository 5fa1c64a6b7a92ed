"""Explicit wiring with ``Wire`` and ``Dependency`` instead of annotations.

Each ``Dependency`` names the attribute, the bean, whether it is optional and,
when the class exposes one, the setter to call.
"""

from __future__ import annotations

from beankeeper import Dependency, Keeper, Name, Provides, Wire


class Clock:
    def now(self) -> str:
        return "12:00"


class Scheduler:
    def __init__(self) -> None:
        self._clock: Clock | None = None

    def set_clock(self, clock: Clock) -> None:
        self._clock = clock

    def next_run(self) -> str:
        assert self._clock is not None
        return f"next run after {self._clock.now()}"


def main() -> None:
    keeper = Keeper()
    keeper.register(Clock(), Name("clock"), Provides(Clock))
    keeper.register(
        Scheduler(),
        Name("scheduler"),
        Wire(Dependency("_clock", "clock", annotation=Clock, setter=Scheduler.set_clock)),
    )

    print(keeper.find("scheduler").next_run())  # => next run after 12:00


if __name__ == "__main__":
    main()
