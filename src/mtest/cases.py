"""Test descriptors: unregistered cases and registered tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from mtest.environment import TestEnvironment

TestFunction = Callable[["TestEnvironment"], Any]


@dataclass(frozen=True)
class TestCase:
    """A test that has not been registered yet.

    Attributes:
        name: Display label. Duplicate names are allowed.
        function: Body of the test, called with the owning environment.
        feedback: Message shown in the report only when the test fails.
    """

    __test__ = False

    name: str
    function: TestFunction
    feedback: str = ""


@dataclass(frozen=True)
class Test:
    """A registered test. ``id`` is assigned by the environment."""

    __test__ = False

    id: int
    name: str
    function: TestFunction
    feedback: str = ""


def test_case(name: str, feedback: str = "") -> Callable[[TestFunction], TestCase]:
    """Decorator turning a function into a :class:`TestCase`.

    Example::

        @test_case("Addition", feedback="Check your carry logic")
        def addition(env):
            env.expect_equal(add(1, 2), 3)
    """

    def decorator(function: TestFunction) -> TestCase:
        return TestCase(name=name, function=function, feedback=feedback)

    return decorator


# Keeps pytest from collecting it when imported into a test module
test_case.__test__ = False  # type: ignore[attr-defined]


def is_descriptor(obj: Any) -> bool:
    """Whether obj describes a single test rather than a batch."""
    if isinstance(obj, TestCase):
        return True
    return isinstance(obj, tuple) and len(obj) in (2, 3) and isinstance(obj[0], str)


def coerce_case(obj: Any) -> TestCase:
    """Normalize a descriptor into a TestCase.

    Accepts a TestCase, a ``(name, feedback, function)`` tuple or a
    ``(name, function)`` tuple.
    """
    if isinstance(obj, TestCase):
        return obj
    if isinstance(obj, tuple):
        if len(obj) == 3:
            name, feedback, function = obj
        elif len(obj) == 2:
            name, function = obj
            feedback = ""
        else:
            raise TypeError(f"Test tuple must have 2 or 3 items, got {len(obj)}")
        if not isinstance(name, str) or not isinstance(feedback, str):
            raise TypeError("Test name and feedback must be strings")
        if not callable(function):
            raise TypeError(f"Test function for '{name}' is not callable")
        return TestCase(name=name, function=function, feedback=feedback)
    raise TypeError(f"Cannot register {type(obj).__name__} as a test")
