"""Call-site capture: locate the user code that invoked a DSL keyword.

Walks interpreter frames outward and returns the first one that does not
belong to the archdsl package.
"""

from __future__ import annotations

import os
import sys
from types import FrameType

from archdsl.domain.model.diagnostic import CallSite

_PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) + os.sep


def is_internal(filename: str) -> bool:
    """Check if filename belongs to the archdsl package."""
    return os.path.abspath(filename).startswith(_PACKAGE_ROOT)


def caller_site() -> CallSite | None:
    """Location of the innermost non-archdsl frame on the current stack.

    Returns:
        CallSite of the user frame, None if none found (e.g. frames
        without line information)
    """
    frame: FrameType | None = sys._getframe(1)
    while frame is not None:
        code = frame.f_code
        if not is_internal(code.co_filename):
            if frame.f_lineno is None or frame.f_lineno <= 0:
                return None
            return CallSite(file=code.co_filename, line=frame.f_lineno, func=code.co_name)
        frame = frame.f_back
    return None
