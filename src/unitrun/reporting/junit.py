"""JUnit XML report for a finished run."""

from __future__ import annotations

from pathlib import Path

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from unitrun.runner import RunSummary


def write_junit(summary: RunSummary, path: Path, suite_name: str = "unitrun") -> Path:
    """Write a JUnit XML report of a finished run, return its path."""
    xml = JUnitXml()
    suite = TestSuite(suite_name)

    for result in summary.results:
        case = TestCase(result.name)
        case.classname = "death" if result.death else "test"
        case.time = round(result.duration_seconds, 6)
        message = result.failure_message()
        if message is not None:
            # Unexpected exceptions in ordinary tests are errors, not failures
            if result.error is not None and not result.death:
                case.result = [Error(message, result.error.split(":", 1)[0])]
            else:
                case.result = [Failure(message)]
        suite.add_testcase(case)

    suite.add_property("passed", str(summary.passed))
    suite.add_property("failed", str(summary.failed))
    suite.update_statistics()
    # Set time after update_statistics, which resets it
    suite.time = round(sum(r.duration_seconds for r in summary.results), 6)

    # Use append (not +=) to preserve properties and time
    xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
