"""Small shared utilities for kubestate.

Helpers for timestamps, the dotted debug form of a metric and JSON output.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kubestate.models import Metric


# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Debug string form
# ---------------------------------------------------------------------------

def format_value(value: Any) -> str:
    """Render a metric value the way the dotted debug form expects.

    Floats use their shortest round-trip digits and switch to exponent form
    below 1e-4 and from 1e6 upwards: ``4.3``, ``1000``, ``2e+09``.
    """
    if isinstance(value, bool):
        return str(int(value))
    if not isinstance(value, float):
        return str(value)
    if value != value or value in (float("inf"), float("-inf")):
        return repr(value)

    d = Decimal(repr(value)).normalize()
    digits = d.as_tuple().digits
    exp = d.adjusted()
    if exp < -4 or exp >= 6:
        return format(value, f".{max(len(digits) - 1, 0)}e")
    return format(d, "f")


def format_metric(mt: "Metric") -> str:
    """``<dotted namespace> <value>``, e.g. ``...node.n1.status.capacity.pods 1000``."""
    return f"{mt.namespace.key()} {format_value(mt.data)}"


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------

def write_json(data: Any, path: str | Path) -> Path:
    """Write *data* as pretty-printed JSON and return the resolved path."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, default=str)
    return p
