"""Sequential test runner and the END_TEST completion marker."""

from __future__ import annotations

import logging
import time
from contextvars import ContextVar
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any

from unitrun.assertions import AssertionSignal
from unitrun.errors import EndTestError
from unitrun.registry import TestCase, TestRegistry


class Outcome(str, Enum):
    NOT_RUN = "not_run"
    COMPLETED = "completed"
    RAISED = "raised"


@dataclass
class _ActiveCase:
    name: str
    outcome: Outcome = Outcome.NOT_RUN

    def complete(self) -> None:
        if self.outcome is not Outcome.NOT_RUN:
            raise EndTestError(
                f"END_TEST() called more than once in test case '{self.name}'"
            )
        self.outcome = Outcome.COMPLETED


_active_case: ContextVar[_ActiveCase | None] = ContextVar(
    "unitrun_active_case", default=None
)


def END_TEST() -> None:
    """Mark the running test body as completed. Must be its last statement."""
    case = _active_case.get()
    if case is None:
        raise EndTestError("END_TEST() called outside a running test case")
    case.complete()


@dataclass
class CaseResult:
    index: int
    name: str
    death: bool
    outcome: Outcome
    error: str | None = None
    duration_seconds: float = 0.0

    @property
    def passed(self) -> bool:
        # A death test passes exactly when an ordinary test would fail.
        if self.death:
            return self.outcome is not Outcome.COMPLETED
        return self.outcome is Outcome.COMPLETED

    def failure_message(self) -> str | None:
        """Why the test failed, or None if it passed."""
        if self.passed:
            return None
        if self.death:
            return "death test completed without failing"
        if self.error is not None:
            return f"unexpected error: {self.error}"
        if self.outcome is Outcome.RAISED:
            return "assertion failed"
        return "test body returned without calling END_TEST()"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["outcome"] = self.outcome.value
        data["passed"] = self.passed
        return data


@dataclass
class RunSummary:
    results: list[CaseResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed


class Runner:
    """Runs every test case in a registry, one at a time, in registration order.

    Assertion failures and unexpected exceptions abort only the body that
    raised them; the run always continues with the next test case.
    ``EndTestError`` (END_TEST() misused) is not contained; any other
    ``HarnessError`` raised inside a body counts as an unexpected error.
    """

    def __init__(self, registry: TestRegistry, logger: logging.Logger | None = None):
        self.registry = registry
        self.logger = logger or logging.getLogger("unitrun")

    def run(self) -> RunSummary:
        summary = RunSummary()
        self.logger.debug(f"Starting run of {len(self.registry)} test case(s)")

        for index, case in enumerate(self.registry, start=1):
            result = self._run_case(index, case)
            summary.results.append(result)
            if result.passed:
                kind = "Death test" if case.death else "Test"
                print(f"{kind} case {index}: {case.name} passed")

        print("\nSUMMARY\n")
        print(f"{summary.total} test cases ran.")
        print(f"{summary.passed} passed.")
        print(f"{summary.failed} failed.")

        self.logger.debug(
            f"Run finished: {summary.total} ran, {summary.passed} passed, "
            f"{summary.failed} failed"
        )
        return summary

    def _run_case(self, index: int, case: TestCase) -> CaseResult:
        """Run a single test body and record how it ended."""
        print(
            f"Running {'death ' if case.death else ''}test case {index}: "
            f"{case.name} . . ."
        )
        self.logger.debug(f"Running test case {index}: '{case.name}'")

        active = _ActiveCase(name=case.name)
        token = _active_case.set(active)
        error = None
        start = time.perf_counter()
        try:
            case.body()
        except AssertionSignal:
            # Already reported by ASSERT.
            active.outcome = Outcome.RAISED
            self.logger.debug(f"Test case '{case.name}' aborted by assertion failure")
        except EndTestError:
            raise
        except Exception as e:
            active.outcome = Outcome.RAISED
            error = f"{type(e).__name__}: {e}"
            print(f"Unexpected error: {error}")
            self.logger.debug(f"Test case '{case.name}' raised", exc_info=True)
        finally:
            _active_case.reset(token)
        duration = time.perf_counter() - start

        if active.outcome is Outcome.NOT_RUN:
            self.logger.warning(
                f"Test case '{case.name}' returned without calling END_TEST()"
            )

        result = CaseResult(
            index=index,
            name=case.name,
            death=case.death,
            outcome=active.outcome,
            error=error,
            duration_seconds=duration,
        )
        self.logger.debug(
            f"Test case '{case.name}' {'passed' if result.passed else 'failed'} "
            f"({result.outcome.value}, {duration:.3f}s)"
        )
        return result
