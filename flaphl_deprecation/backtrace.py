"""
Call-stack capture for deprecation log entries.

The backtrace shows where deprecated code was reached from, with the
toolkit's own frames removed so the first line is always user code.
"""

import inspect
import os
import traceback
from itertools import islice
from types import FrameType

# Extra frames fetched to make up for internal frames dropped by the filter
_OVERFETCH = 5

# Public entry points whose frames never belong in a backtrace
INTERNAL_FUNCTIONS = frozenset(
    {
        "trigger_deprecation",
        "log_deprecation",
        "build_deprecation_message",
        "get_deprecation_backtrace",
        "get_deprecation_log_file",
    }
)

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep


def _is_internal(frame: FrameType) -> bool:
    code = frame.f_code
    if code.co_name in INTERNAL_FUNCTIONS:
        return True
    return os.path.abspath(code.co_filename).startswith(_PACKAGE_DIR)


def _split_qualname(frame: FrameType) -> tuple[str, str, str]:
    """Split a frame's qualified name into (class, call type, function)."""
    code = frame.f_code
    owner, _, name = code.co_qualname.rpartition(".")
    # Nested functions ("outer.<locals>.inner") are free functions
    if not owner or owner.endswith("<locals>"):
        return "", "", code.co_name
    return owner.rsplit("<locals>.", 1)[-1], ".", name


def _location(filename: str | None, lineno: int | None) -> str:
    if filename and lineno is not None:
        return f"{filename}:{lineno}"
    if filename:
        return filename
    if lineno is not None:
        return str(lineno)
    return ""


def get_deprecation_backtrace(limit: int = 10) -> str:
    """
    Retrieve a formatted backtrace for deprecation notices.

    Frames are listed innermost first, without argument values:

        #0 Cache.get() called at [/app/cache.py:42]
        #1 main() called at [/app/run.py:7]
        #2 <module> called at [/app/run.py:12]

    Args:
        limit: Maximum number of frames to include

    Returns:
        Newline-joined frame descriptions (no trailing newline)
    """
    if limit <= 0:
        return ""

    stack = traceback.walk_stack(inspect.currentframe())
    candidates = islice(stack, limit + _OVERFETCH)
    frames = [(f, lineno) for f, lineno in candidates if not _is_internal(f)]

    lines = []
    for index, (frame, lineno) in enumerate(frames[:limit]):
        cls, call_type, function = _split_qualname(frame)
        # Top-level script code is not a call
        call = function if function == "<module>" else f"{function}()"
        location = _location(frame.f_code.co_filename, lineno)
        lines.append(f"#{index} {cls}{call_type}{call} called at [{location}]")

    return "\n".join(lines)
