"""ASSERT and the signal it raises to abort the current test body."""

from __future__ import annotations


class AssertionSignal(Exception):
    """Raised by ASSERT on failure.

    Carries no payload: the diagnostic has already been printed by the time
    it is raised, and the runner only needs to know that the body aborted.
    """


def ASSERT(result: str, message: str | None = None) -> None:
    """Abort the running test if ``result`` is a failure diagnostic.

    ``result`` is the return value of a predicate: ``""`` means the
    predicate held. On failure, ``message`` (when given) is printed in
    place of the predicate's own diagnostic.
    """
    if not isinstance(result, str):
        raise TypeError(
            f"ASSERT expects a predicate result (str), got {type(result).__name__}"
        )
    if not result:
        return
    print("Failure")
    print(message if message is not None else result)
    raise AssertionSignal()
