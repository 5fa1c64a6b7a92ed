"""Optional dependencies with ``Bean(name, optional=True)`` or the ``name,optional`` tag.

A missing optional bean leaves the attribute untouched; a missing required
bean fails registration and nothing is stored.
"""

from __future__ import annotations

from typing import Annotated

from beankeeper import Bean, BeanKeeperDependencyNotRegisteredError, Keeper, Name


class Metrics:
    def record(self, event: str) -> str:
        return f"recorded:{event}"


class Database:
    pass


class OrderService:
    database: Annotated[Database, Bean("database")]
    metrics: Annotated[Metrics | None, Bean.parse("metrics,optional")] = None

    def place(self) -> str:
        if self.metrics is None:
            return "placed"
        return self.metrics.record("placed")


def main() -> None:
    keeper = Keeper()

    try:
        keeper.register(OrderService(), Name("orders"))
    except BeanKeeperDependencyNotRegisteredError as error:
        print(f"missing={error.name}")  # => missing=database
    print(f"registered={'orders' in keeper}")  # => registered=False

    keeper.register(Database(), Name("database"))
    keeper.register(OrderService(), Name("orders"))
    print(keeper.find("orders").place())  # => placed

    keeper.register(Metrics(), Name("metrics"))
    keeper.register(OrderService(), Name("ordersWithMetrics"))
    print(keeper.find("ordersWithMetrics").place())  # => recorded:placed


if __name__ == "__main__":
    main()
