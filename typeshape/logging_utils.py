"""typeshape.logging_utils
==========================

Simple logging utilities, mainly for recording rejected type expressions so
the set of supported shapes can be audited later.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from .constants import UNSUPPORTED_LOG


def log_unsupported(type_name: str, reason: str, path: Union[str, Path] = UNSUPPORTED_LOG) -> None:
    """Append a JSON line describing a rejected type to ``path``."""

    entry = {
        "type": type_name,
        "reason": reason,
        "at": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
    }
    with Path(path).open("a") as handle:
        handle.write(json.dumps(entry) + "\n")


__all__ = ["log_unsupported"]
