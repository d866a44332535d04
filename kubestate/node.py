"""
Node collector.

Capacity and allocatable metrics are emitted only when the resource is
present in the node's map; missing entries are skipped, never zero-filled.
"""

from typing import Any, List, Sequence

from .common import attr, bind, bool_int, byte_value, condition_true, cpu_cores, usable_namespace
from .models import LAYOUTS, Kind, Metric
from .namespace import slugify


NODE = LAYOUTS[Kind.node]

OUT_OF_DISK = "OutOfDisk"

RESOURCE_CONVERTERS = {
    "cpu": cpu_cores,
    "memory": byte_value,
    "pods": byte_value,
}


class NodeCollector:
    """Scheduling flags, disk pressure and resource totals of a node."""

    kind = Kind.node

    def collect(self, mts: Sequence[Metric], node: Any) -> List[Metric]:
        metrics: List[Metric] = []

        for mt in mts:
            ns = usable_namespace(mt, NODE)
            if ns is None:
                continue

            section, field = ns[NODE.field], ns[NODE.field + 1]
            ns[NODE.node] = slugify(attr(node, "metadata", "name"))

            if section == "spec" and field == "unschedulable":
                metrics.append(bind(mt, ns, bool_int(attr(node, "spec", "unschedulable"))))
            elif section == "status" and field == "outofdisk":
                conditions = attr(node, "status", "conditions")
                metrics.append(bind(mt, ns, bool_int(condition_true(conditions, OUT_OF_DISK))))
            elif section == "status" and field in ("capacity", "allocatable"):
                value = self._resource(node, field, ns)
                if value is not None:
                    metrics.append(bind(mt, ns, value))

        return metrics

    def _resource(self, node: Any, field: str, ns: List[str]):
        if len(ns) <= NODE.field + 2:
            return None
        resource = ns[NODE.field + 2]
        convert = RESOURCE_CONVERTERS.get(resource)
        resources = attr(node, "status", field) or {}
        if convert is None or resource not in resources:
            return None
        return convert(resources[resource])
