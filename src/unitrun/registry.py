"""Registry of named test cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator

from unitrun.errors import DuplicateTestError, RegistrationError

TestBody = Callable[[], Any]


@dataclass(frozen=True)
class TestCase:
    """A registered test body.

    Attributes:
        name: Unique, non-empty identifier of the test.
        body: Zero-argument callable. It should end with ``END_TEST()``.
        death: True if the body is expected to fail an assertion.
    """

    __test__ = False

    name: str
    body: TestBody
    death: bool = False


class TestRegistry:
    """Test cases in registration order, keyed by name."""

    __test__ = False

    def __init__(self) -> None:
        self._cases: dict[str, TestCase] = {}
        self._death_tests: set[str] = set()

    def test(self, name: str, body: TestBody | None = None):
        """Register an ordinary test.

        With ``body`` omitted, returns a decorator that registers the
        decorated function and hands it back unchanged.
        """
        return self._register(name, body, death=False)

    def death_test(self, name: str, body: TestBody | None = None):
        """Register a test that passes only if its body fails."""
        return self._register(name, body, death=True)

    def _register(self, name: str, body: TestBody | None, death: bool):
        if body is None:

            def decorator(fn: TestBody) -> TestBody:
                self._add(name, fn, death)
                return fn

            return decorator
        self._add(name, body, death)
        return body

    def _add(self, name: str, body: TestBody, death: bool) -> None:
        if not isinstance(name, str) or not name:
            raise RegistrationError(
                f"Test case name must be a non-empty string, got {name!r}"
            )
        if not callable(body):
            raise RegistrationError(f"Test case {name!r} body is not callable")
        if name in self._cases:
            raise DuplicateTestError(name)
        self._cases[name] = TestCase(name=name, body=body, death=death)
        if death:
            self._death_tests.add(name)

    def is_death_test(self, name: str) -> bool:
        return name in self._death_tests

    def get(self, name: str) -> TestCase | None:
        return self._cases.get(name)

    def names(self) -> list[str]:
        return list(self._cases)

    def __contains__(self, name: object) -> bool:
        return name in self._cases

    def __iter__(self) -> Iterator[TestCase]:
        return iter(list(self._cases.values()))

    def __len__(self) -> int:
        return len(self._cases)
