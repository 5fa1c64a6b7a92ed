"""Quickstart: register beans by name and let the keeper wire them.

``HelloCtl`` declares a private attribute tagged with the name of the bean it
needs. Registering the controller after the service fills that attribute.
"""

from __future__ import annotations

from typing import Annotated

from beankeeper import Bean, Keeper, Name


class HelloSrv:
    def __init__(self, word: str) -> None:
        self.word = word

    def hello(self) -> str:
        return "Hello World " + self.word


class HelloCtl:
    _hello_srv: Annotated[HelloSrv, Bean("helloService")]

    def hello(self) -> str:
        return self._hello_srv.hello()


def main() -> None:
    keeper = Keeper()
    service = HelloSrv(word="from beankeeper")
    keeper.register(service, Name("helloService"))
    keeper.register(HelloCtl(), Name("helloCtl"))

    controller = keeper.find("helloCtl")
    print(controller.hello())  # => Hello World from beankeeper
    print(f"same_answer={controller.hello() == service.hello()}")  # => same_answer=True
    print(f"beans={sorted(keeper.all())}")  # => beans=['helloCtl', 'helloService']


if __name__ == "__main__":
    main()
