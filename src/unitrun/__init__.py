"""unitrun: register named test cases, run them in order, print a summary.

Typical test script::

    from unitrun import *

    def adds_up():
        ASSERT(EQ(2, 1 + 1))
        END_TEST()

    TEST("adds_up", adds_up)

    @DEATH_TEST("must_fail")
    def must_fail():
        ASSERT(FALSE(True))
        END_TEST()

    RUN_ALL_TESTS()
"""

from __future__ import annotations

from unitrun.assertions import ASSERT, AssertionSignal
from unitrun.coercion import undefined
from unitrun.errors import (
    DuplicateTestError,
    EndTestError,
    HarnessError,
    RegistrationError,
)
from unitrun.host import (
    QuitCode,
    current_session,
    gc,
    json_decode,
    json_encode,
    quit,
    session,
    show_file_and_line,
)
from unitrun.predicates import *  # noqa: F403
from unitrun.predicates import __all__ as _predicates
from unitrun.registry import TestBody, TestCase, TestRegistry
from unitrun.runner import END_TEST, CaseResult, Outcome, Runner, RunSummary
from unitrun.verbose import set_verbose


def _register(name: str, body: TestBody | None, death: bool):
    if body is None:

        def decorator(fn: TestBody) -> TestBody:
            return _register(name, fn, death)

        return decorator
    registry = current_session().registry
    try:
        if death:
            return registry.death_test(name, body)
        return registry.test(name, body)
    except RegistrationError as e:
        print(e)
        quit(QuitCode.SCRIPT_ERROR)


def TEST(name: str, body: TestBody | None = None):
    """Register an ordinary test in the current session.

    A duplicate or invalid registration is fatal: the message is printed
    and the process exits with ``QuitCode.SCRIPT_ERROR``.
    """
    return _register(name, body, death=False)


def DEATH_TEST(name: str, body: TestBody | None = None):
    """Register a test that is expected to fail an assertion."""
    return _register(name, body, death=True)


def RUN_ALL_TESTS() -> RunSummary:
    """Run every test registered in the current session."""
    current = current_session()
    current.summary = Runner(current.registry).run()
    return current.summary


__all__ = [
    "ASSERT",
    "AssertionSignal",
    "CaseResult",
    "DEATH_TEST",
    "DuplicateTestError",
    "END_TEST",
    "EndTestError",
    "HarnessError",
    "Outcome",
    "QuitCode",
    "RUN_ALL_TESTS",
    "RegistrationError",
    "RunSummary",
    "Runner",
    "TEST",
    "TestCase",
    "TestRegistry",
    "current_session",
    "gc",
    "json_decode",
    "json_encode",
    "quit",
    "session",
    "set_verbose",
    "show_file_and_line",
    "undefined",
    *_predicates,
]
