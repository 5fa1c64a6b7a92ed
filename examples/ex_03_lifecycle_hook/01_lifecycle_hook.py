"""Run setup code once all dependencies are in place with ``after_property_set``."""

from __future__ import annotations

from typing import Annotated

from beankeeper import Bean, Keeper, Name


class Config:
    def __init__(self, greeting: str) -> None:
        self.greeting = greeting


class Greeter:
    config: Annotated[Config, Bean("config")]

    def __init__(self) -> None:
        self.template = ""

    def after_property_set(self) -> None:
        self.template = self.config.greeting + ", {}!"

    def greet(self, name: str) -> str:
        return self.template.format(name)


class App:
    greeter: Annotated[Greeter, Bean("greeter")]


def main() -> None:
    keeper = Keeper()
    keeper.register(Config(greeting="Hi"), Name("config"))
    keeper.register(Greeter(), Name("greeter"))

    app = App()
    keeper.provide(app)

    print(app.greeter.greet("Ada"))  # => Hi, Ada!
    print(f"app_registered={'app' in keeper}")  # => app_registered=False


if __name__ == "__main__":
    main()
