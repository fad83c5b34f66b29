# Case-sensitivity configuration for wildkarte.
# The default follows the host platform and can be overridden through the
# environment or, per call, by the caller.

from __future__ import annotations

import os
import sys
from typing import Optional

# Environment override for the platform default.
IGNORE_CASE_ENV = "WILDKARTE_IGNORE_CASE"

# Platforms whose default filesystems compare names case-insensitively.
_CASE_INSENSITIVE_PLATFORMS = ("win32", "cygwin", "darwin")

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def default_case_sensitive() -> bool:
    # Environment first, then platform.
    # Unrecognized environment values are ignored rather than fatal.
    raw = os.environ.get(IGNORE_CASE_ENV, "").strip().lower()
    if raw in _TRUTHY:
        return False
    if raw in _FALSY:
        return True
    return sys.platform not in _CASE_INSENSITIVE_PLATFORMS


def resolve_case_sensitive(ignore_case: Optional[bool]) -> bool:
    # An explicit caller choice always wins.
    if ignore_case is None:
        return default_case_sensitive()
    return not ignore_case
