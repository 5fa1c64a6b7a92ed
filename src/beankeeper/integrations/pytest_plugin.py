from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, cast, get_type_hints

import pytest

from beankeeper.binder import MISSING, Binder
from beankeeper.keeper import Keeper
from beankeeper.markers import bean_marker_of, strip_bean_annotation
from beankeeper.wiring import Dependency

logger = logging.getLogger(__name__)

_BEANKEEPER_KEEPER_ATTR = "_beankeeper_keeper"
_BEANKEEPER_BEAN_PARAMETERS_ATTR = "__beankeeper_pytest_bean_parameters__"


@dataclass(frozen=True, slots=True)
class BeanParameter:
    """A test-function parameter filled from the keeper instead of a fixture."""

    dependency: Dependency
    default: Any = inspect.Parameter.empty


def inspect_bean_parameters(
    func: Callable[..., Any],
) -> tuple[inspect.Signature, tuple[BeanParameter, ...]]:
    """Split ``func``'s parameters into fixtures and ``Annotated[T, Bean(...)]`` parameters.

    Returns:
        The public signature without bean parameters, and the bean parameters.

    """
    signature = inspect.signature(func)
    try:
        hints = get_type_hints(func, include_extras=True)
    except (AttributeError, NameError, TypeError) as error:
        logger.debug("Not injecting beans into %s: %s", func.__qualname__, error)
        return signature, ()

    bean_parameters: list[BeanParameter] = []
    public_parameters: list[inspect.Parameter] = []
    for parameter in signature.parameters.values():
        annotation = hints.get(parameter.name)
        marker = bean_marker_of(annotation)
        if marker is None:
            public_parameters.append(parameter)
            continue
        bean_parameters.append(
            BeanParameter(
                dependency=Dependency(
                    field=parameter.name,
                    name=marker.name,
                    optional=marker.optional,
                    annotation=strip_bean_annotation(annotation),
                ),
                default=parameter.default,
            ),
        )

    return signature.replace(parameters=public_parameters), tuple(bean_parameters)


@pytest.fixture()
def beankeeper_keeper() -> Keeper:
    """Fixture hook for the keeper that test parameters are filled from.

    The default is an empty keeper. Override this fixture in your own test
    suite to register the beans your tests ask for.

    """
    return Keeper()


@pytest.fixture(autouse=True)
def _beankeeper_state(
    request: pytest.FixtureRequest,
    beankeeper_keeper: Keeper,
) -> None:
    """Store plugin state on the test node for hook access."""
    node = cast("Any", request.node)
    setattr(node, _BEANKEEPER_KEEPER_ATTR, beankeeper_keeper)


def pytest_pycollect_makeitem(
    collector: Any,
    name: str,
    obj: object,
) -> Any | None:
    """Hide ``Annotated[T, Bean(...)]`` parameters from pytest fixture name matching.

    Returns:
        ``None`` to continue default collection flow.

    """
    if not callable(obj):
        return None
    if not collector.istestfunction(obj, name):
        return None

    public_signature, bean_parameters = inspect_bean_parameters(cast("Callable[..., Any]", obj))
    if not bean_parameters:
        return None

    obj_as_any = cast("Any", obj)
    obj_as_any.__dict__[_BEANKEEPER_BEAN_PARAMETERS_ATTR] = bean_parameters
    obj_as_any.__signature__ = public_signature
    return None


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> Iterator[None]:
    """Wrap test function execution to pass beans for marked parameters.

    A required bean that is not registered fails the test with
    ``BeanKeeperDependencyNotRegisteredError``; a missing optional bean is
    passed as the parameter default, or ``None`` when there is none.

    """
    original_callable = cast("Callable[..., Any]", pyfuncitem.obj)
    bean_parameters = cast(
        "tuple[BeanParameter, ...] | None",
        getattr(original_callable, _BEANKEEPER_BEAN_PARAMETERS_ATTR, None),
    )
    keeper = cast("Keeper | None", getattr(pyfuncitem, _BEANKEEPER_KEEPER_ATTR, None))
    if not bean_parameters or keeper is None:
        yield
        return

    binder = Binder(keeper, check_types=keeper.settings.check_types)
    owner = original_callable.__qualname__

    @functools.wraps(original_callable)
    def _invoke_with_beans(*args: Any, **kwargs: Any) -> Any:
        for parameter in bean_parameters:
            value = binder.resolve(parameter.dependency, owner=owner)
            if value is MISSING:
                if parameter.default is not inspect.Parameter.empty:
                    continue
                value = None
            kwargs[parameter.dependency.field] = value
        return original_callable(*args, **kwargs)

    pyfuncitem.obj = _invoke_with_beans
    try:
        yield
    finally:
        pyfuncitem.obj = original_callable


__all__ = [
    "BeanParameter",
    "beankeeper_keeper",
    "inspect_bean_parameters",
]
