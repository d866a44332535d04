"""Helpers shared by the per-kind collectors.

Guards for malformed requests, None-safe attribute access on the kubernetes
client models, quantity conversion and measurement construction.
"""

from __future__ import annotations

import logging
from decimal import ROUND_CEILING, Decimal
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from kubernetes.utils import parse_quantity

from kubestate import config
from kubestate.models import Layout, Metric, MetricValue, kind_of
from kubestate.utils import utcnow

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request guards
# ---------------------------------------------------------------------------

def usable_namespace(mt: Metric, layout: Layout) -> Optional[List[str]]:
    """Return a private copy of *mt*'s strings, or None if *mt* must be skipped.

    Skips namespaces shorter than the layout minimum, namespaces with denied
    characters and namespaces of another kind.
    """
    ns = mt.namespace.strings()
    if len(ns) < layout.min_size:
        logger.debug("Skipping %s: shorter than %d segments", mt.namespace.key(), layout.min_size)
        return None
    if not mt.namespace.is_valid():
        logger.debug("Skipping %s: invalid characters", mt.namespace.key())
        return None
    if kind_of(ns) != layout.kind:
        return None
    return ns


# ---------------------------------------------------------------------------
# Field access
# ---------------------------------------------------------------------------

def attr(obj: Any, *path: str) -> Any:
    """Follow *path* through nested attributes, returning None on any gap."""
    for name in path:
        if obj is None:
            return None
        obj = getattr(obj, name, None)
    return obj


def bool_int(value: Any) -> int:
    return 1 if value else 0


def count(value: Optional[int]) -> int:
    return value if value is not None else 0


def condition_true(conditions: Optional[Iterable[Any]], condition_type: str) -> bool:
    """True iff a condition of *condition_type* exists with status True."""
    for c in conditions or []:
        if c.type == condition_type and c.status == config.CONDITION_TRUE:
            return True
    return False


def lookup(resources: Optional[Mapping[str, Any]], keys: Sequence[str]) -> Optional[Any]:
    """First value in *resources* found under *keys*, tried in order."""
    if not resources:
        return None
    for key in keys:
        if key in resources:
            return resources[key]
    return None


# ---------------------------------------------------------------------------
# Quantities
# ---------------------------------------------------------------------------

def _parse(quantity: Any) -> Optional[Decimal]:
    if quantity is None:
        return None
    try:
        return parse_quantity(quantity)
    except (TypeError, ValueError, ArithmeticError) as exc:
        logger.debug("Ignoring malformed quantity %r: %s", quantity, exc)
        return None


def cpu_cores(quantity: Any) -> Optional[float]:
    """Cores as a float, rounded up to whole millicores."""
    q = _parse(quantity)
    if q is None:
        return None
    millis = (q * 1000).to_integral_value(rounding=ROUND_CEILING)
    return float(millis) / 1000


def byte_value(quantity: Any) -> Optional[float]:
    """Whole units (bytes, pods) as a float, rounded up."""
    q = _parse(quantity)
    if q is None:
        return None
    return float(q.to_integral_value(rounding=ROUND_CEILING))


# ---------------------------------------------------------------------------
# Measurements
# ---------------------------------------------------------------------------

def bind(mt: Metric, ns: Sequence[str], value: MetricValue) -> Metric:
    """Build a fresh measurement from template *mt*, bound names *ns* and *value*."""
    return mt.model_copy(update={
        "namespace": mt.namespace.with_values(list(ns)),
        "data": value,
        "timestamp": utcnow(),
        "config": dict(mt.config),
    })
