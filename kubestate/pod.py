"""
Pod and container collectors.

Pod metrics bind one measurement per requested metric. Container metrics fan
out: status metrics once per entry in ``status.container_statuses``, resource
metrics once per entry in ``spec.containers``. The two lists are walked
independently; resource metrics are not matched against container statuses.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from . import config
from .common import (
    attr,
    bind,
    bool_int,
    byte_value,
    condition_true,
    cpu_cores,
    lookup,
    usable_namespace,
)
from .models import LAYOUTS, Kind, Metric
from .namespace import slugify


POD = LAYOUTS[Kind.pod]
CONTAINER = LAYOUTS[Kind.container]

POD_CONDITIONS: Dict[str, str] = {
    "ready": "Ready",
    "scheduled": "PodScheduled",
}

# Container status field -> value read from one V1ContainerStatus.
CONTAINER_STATUS: Dict[str, Callable[[Any], int]] = {
    "restarts": lambda cs: cs.restart_count or 0,
    "ready": lambda cs: bool_int(cs.ready),
    "waiting": lambda cs: bool_int(attr(cs, "state", "waiting") is not None),
    "running": lambda cs: bool_int(attr(cs, "state", "running") is not None),
    "terminated": lambda cs: bool_int(attr(cs, "state", "terminated") is not None),
}

RESOURCE_SECTIONS = {
    "requested": ("requests", config.REQUEST_KEYS),
    "limits": ("limits", config.LIMIT_KEYS),
}

RESOURCE_CONVERTERS = {
    "cpu": cpu_cores,
    "memory": byte_value,
}


def _pod_identity(ns: List[str], pod: Any, layout) -> None:
    ns[layout.namespace] = slugify(attr(pod, "metadata", "namespace"))
    ns[layout.node] = slugify(attr(pod, "spec", "node_name"))
    ns[layout.name] = slugify(attr(pod, "metadata", "name"))


class PodCollector:
    """Phase indicators and conditions of a single pod."""

    kind = Kind.pod

    def collect(self, mts: Sequence[Metric], pod: Any) -> List[Metric]:
        metrics: List[Metric] = []

        for mt in mts:
            ns = usable_namespace(mt, POD)
            if ns is None or ns[POD.field] != "status":
                continue

            section = ns[POD.field + 1]
            value = ns[POD.field + 2]

            if section == "phase":
                _pod_identity(ns, pod, POD)
                phase = attr(pod, "status", "phase")
                metrics.append(bind(mt, ns, bool_int(value == phase)))
            elif section == "condition" and value in POD_CONDITIONS:
                _pod_identity(ns, pod, POD)
                conditions = attr(pod, "status", "conditions")
                present = condition_true(conditions, POD_CONDITIONS[value])
                metrics.append(bind(mt, ns, bool_int(present)))

        return metrics


class ContainerCollector:
    """Per-container status and resource metrics of a single pod."""

    kind = Kind.container

    def collect(self, mts: Sequence[Metric], pod: Any) -> List[Metric]:
        metrics: List[Metric] = []

        for mt in mts:
            ns = usable_namespace(mt, CONTAINER)
            if ns is None:
                continue

            section = ns[CONTAINER.field]
            if section == "status":
                metrics.extend(self._status(mt, ns, pod))
            elif section in RESOURCE_SECTIONS:
                metrics.extend(self._resources(mt, ns, pod))

        return metrics

    def _status(self, mt: Metric, ns: List[str], pod: Any) -> List[Metric]:
        read = CONTAINER_STATUS.get(ns[CONTAINER.field + 1])
        if read is None:
            return []

        metrics = []
        for cs in attr(pod, "status", "container_statuses") or []:
            bound = list(ns)
            _pod_identity(bound, pod, CONTAINER)
            bound[CONTAINER.container] = slugify(cs.name)
            metrics.append(bind(mt, bound, read(cs)))
        return metrics

    def _resources(self, mt: Metric, ns: List[str], pod: Any) -> List[Metric]:
        field, candidates = RESOURCE_SECTIONS[ns[CONTAINER.field]]
        resource = ns[CONTAINER.field + 1]
        keys = candidates.get(resource)
        convert = RESOURCE_CONVERTERS.get(resource)
        if keys is None or convert is None:
            return []

        metrics = []
        for c in attr(pod, "spec", "containers") or []:
            value: Optional[float] = convert(lookup(attr(c, "resources", field), keys))
            if value is None:
                continue
            bound = list(ns)
            _pod_identity(bound, pod, CONTAINER)
            bound[CONTAINER.container] = slugify(c.name)
            metrics.append(bind(mt, bound, value))
        return metrics
