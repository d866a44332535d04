"""
Collector registry.

Maps each fetch bucket to the collectors run against the objects listed for
it. Pods feed both the pod and the container collector.
"""

from typing import Any, Dict, List, Protocol, Sequence, Tuple

from .deployment import DeploymentCollector
from .job import JobCollector
from .models import Kind, Metric
from .node import NodeCollector
from .pod import ContainerCollector, PodCollector


class Collector(Protocol):
    """Turns requested metrics plus one cluster object into measurements."""

    kind: Kind

    def collect(self, mts: Sequence[Metric], obj: Any) -> List[Metric]:
        ...


CollectorMap = Dict[Kind, Tuple[Collector, ...]]

COLLECTORS: CollectorMap = {
    Kind.pod: (PodCollector(), ContainerCollector()),
    Kind.node: (NodeCollector(),),
    Kind.deployment: (DeploymentCollector(),),
    Kind.job: (JobCollector(),),
}
