"""Process-level services available to tests and the global API.

Also holds the *session*: the registry that ``TEST``/``DEATH_TEST``
register into and ``RUN_ALL_TESTS`` runs. A fresh session can be opened
with :func:`session` so that independent runs never share test cases.
"""

from __future__ import annotations

import gc as _gc
import inspect
import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterator, NoReturn

from unitrun.assertions import ASSERT
from unitrun.registry import TestRegistry
from unitrun.runner import RunSummary


class QuitCode(IntEnum):
    OK = 0
    ERROR = 1
    SCRIPT_ERROR = 2
    ASSERT = 3


def quit(code: int = QuitCode.OK) -> NoReturn:
    sys.exit(int(code))


def gc() -> int:
    """Run a full garbage collection, returning the number of unreachable objects."""
    return _gc.collect()


def json_encode(value: Any) -> str:
    """Serialize ``value`` to JSON, failing the running test if it cannot be encoded."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        ASSERT("JSONEncode failed")
        raise


def json_decode(text: str) -> Any:
    try:
        return json.loads(str(text))
    except ValueError:
        ASSERT("JSONDecode failed")
        raise


def show_file_and_line() -> str:
    """Print and return the caller's ``file:line``."""
    caller = inspect.stack()[1]
    location = f"{caller.filename}:{caller.lineno}"
    print(location)
    return location


@dataclass
class Session:
    registry: TestRegistry = field(default_factory=TestRegistry)
    summary: RunSummary | None = None


_default_session = Session()
_current_session: ContextVar[Session] = ContextVar(
    "unitrun_session", default=_default_session
)


def current_session() -> Session:
    return _current_session.get()


@contextmanager
def session() -> Iterator[Session]:
    """Install a fresh session for the duration of the ``with`` block."""
    new_session = Session()
    token = _current_session.set(new_session)
    try:
        yield new_session
    finally:
        _current_session.reset(token)
