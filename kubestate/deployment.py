"""
Deployment collector.

Direct reads of metadata, status and spec. ``spec.desiredreplicas`` is only
emitted when the deployment sets ``spec.replicas``; an unset value and an
explicit zero are different things.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .common import attr, bind, bool_int, count, usable_namespace
from .models import LAYOUTS, Kind, Metric
from .namespace import slugify


DEPLOYMENT = LAYOUTS[Kind.deployment]

# (section, field) -> value read from a V1Deployment; None means "do not emit".
FIELDS: Dict[Tuple[str, str], Callable[[Any], Optional[int]]] = {
    ("metadata", "generation"): lambda d: count(attr(d, "metadata", "generation")),
    ("status", "observedgeneration"): lambda d: count(attr(d, "status", "observed_generation")),
    ("status", "targetedreplicas"): lambda d: count(attr(d, "status", "replicas")),
    ("status", "availablereplicas"): lambda d: count(attr(d, "status", "available_replicas")),
    ("status", "unavailablereplicas"): lambda d: count(attr(d, "status", "unavailable_replicas")),
    ("status", "updatedreplicas"): lambda d: count(attr(d, "status", "updated_replicas")),
    ("spec", "desiredreplicas"): lambda d: attr(d, "spec", "replicas"),
    ("spec", "paused"): lambda d: bool_int(attr(d, "spec", "paused")),
}


class DeploymentCollector:
    """Generation and replica counters of a deployment."""

    kind = Kind.deployment

    def collect(self, mts: Sequence[Metric], deployment: Any) -> List[Metric]:
        metrics: List[Metric] = []

        for mt in mts:
            ns = usable_namespace(mt, DEPLOYMENT)
            if ns is None:
                continue

            read = FIELDS.get((ns[DEPLOYMENT.field], ns[DEPLOYMENT.field + 1]))
            if read is None:
                continue
            value = read(deployment)
            if value is None:
                continue

            ns[DEPLOYMENT.namespace] = slugify(attr(deployment, "metadata", "namespace"))
            ns[DEPLOYMENT.name] = slugify(attr(deployment, "metadata", "name"))
            metrics.append(bind(mt, ns, value))

        return metrics
