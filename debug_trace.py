"""
debug_trace.py

Trace instrumentation for the layout core.

Environment switches (read once at import):

    BUBBLEPLAN_TRACE=1              turn tracing on
    BUBBLEPLAN_TRACE_CATEGORIES=EDIT,ARRANGE
                                    only emit these categories (ERROR always passes)
    BUBBLEPLAN_TRACE_TICKS=1        also emit per-tick declutter lines
    BUBBLEPLAN_TRACE_FILE=path      mirror every line to a file
"""

import os
import sys
import traceback
from datetime import datetime
from functools import wraps
from typing import FrozenSet, Optional, TextIO

DEBUG_TRACE = bool(os.environ.get("BUBBLEPLAN_TRACE"))

TRACE_TICKS = bool(os.environ.get("BUBBLEPLAN_TRACE_TICKS"))

LOG_FILE = os.environ.get("BUBBLEPLAN_TRACE_FILE") or None


def parse_categories(value: Optional[str]) -> FrozenSet[str]:
    """Split a comma separated category list into upper-case names."""
    if not value:
        return frozenset()
    return frozenset(part.strip().upper() for part in value.split(",") if part.strip())


# Empty set means every category
CATEGORIES = parse_categories(os.environ.get("BUBBLEPLAN_TRACE_CATEGORIES"))

_log_file: Optional[TextIO] = None


def enabled(category: str) -> bool:
    """True when a line in ``category`` would be emitted."""
    if not DEBUG_TRACE:
        return False
    category = category.upper()
    if category == "ERROR":
        return True
    if category == "TICK" and not TRACE_TICKS:
        return False
    return not CATEGORIES or category in CATEGORIES


def _sink() -> Optional[TextIO]:
    global _log_file
    if LOG_FILE and _log_file is None:
        try:
            _log_file = open(LOG_FILE, "w", encoding="utf-8")
        except OSError as e:
            print(f"[trace] cannot open {LOG_FILE}: {e}", file=sys.stderr)
    return _log_file


def trace(msg: str, category: str = "INFO"):
    """Emit ``[HH:MM:SS.mmm] [CATEGORY] msg`` on stderr (and the log file)."""
    if not enabled(category):
        return
    stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    line = f"[{stamp}] [{category}] {msg}"
    print(line, file=sys.stderr, flush=True)
    sink = _sink()
    if sink:
        sink.write(line + "\n")
        sink.flush()


def trace_exception(msg: str = "Exception"):
    """Trace the exception currently being handled."""
    if enabled("ERROR"):
        trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def trace_call(category: str = "CALL"):
    """Decorator tracing entry, exit and exceptions of a function."""
    def decorator(func):
        if not DEBUG_TRACE:
            return func

        @wraps(func)
        def wrapper(*args, **kwargs):
            name = func.__qualname__
            trace(f">>> {name}", category)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                trace(f"!!! {name} raised {type(e).__name__}: {e}", "ERROR")
                raise
            trace(f"<<< {name}", category)
            return result
        return wrapper
    return decorator


def close_log():
    global _log_file
    if _log_file:
        _log_file.close()
        _log_file = None
