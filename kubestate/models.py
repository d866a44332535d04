"""Shared models for kubestate.

Every module imports from here to keep the metric shape, the per-kind name
layouts and the collection state in one place.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field

from kubestate.namespace import Namespace

# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------

# Position of the kind marker in every kubestate namespace.
KIND_PART = 2


class Kind(str, Enum):
    """Resource kinds a metric can describe (namespace segment 2)."""
    pod = "pod"
    container = "container"
    node = "node"
    deployment = "deployment"
    job = "job"


# Kinds listed from the same API call. Containers live inside pods.
FETCH_KIND: Dict[Kind, Kind] = {
    Kind.pod: Kind.pod,
    Kind.container: Kind.pod,
    Kind.node: Kind.node,
    Kind.deployment: Kind.deployment,
    Kind.job: Kind.job,
}


# ---------------------------------------------------------------------------
# Namespace layouts
# ---------------------------------------------------------------------------

class Layout(BaseModel):
    """Where each dynamic slot sits in a kind's namespace.

    ``field`` is the first static segment after the identity slots; the
    measured field is read from ``field`` onwards.
    """
    model_config = ConfigDict(frozen=True)

    kind: Kind
    min_size: int
    field: int
    namespace: Optional[int] = None
    node: Optional[int] = None
    name: Optional[int] = None
    container: Optional[int] = None


LAYOUTS: Dict[Kind, Layout] = {
    Kind.pod: Layout(kind=Kind.pod, namespace=3, node=4, name=5, field=6, min_size=9),
    Kind.container: Layout(
        kind=Kind.container, namespace=3, node=4, name=5, container=6, field=7, min_size=9,
    ),
    Kind.node: Layout(kind=Kind.node, node=3, field=4, min_size=6),
    Kind.deployment: Layout(kind=Kind.deployment, namespace=3, name=4, field=5, min_size=7),
    Kind.job: Layout(kind=Kind.job, namespace=3, name=4, field=5, min_size=7),
}


def kind_of(ns: List[str]) -> Optional[Kind]:
    """Kind marker of a namespace string list, or None if absent/unknown."""
    if len(ns) <= KIND_PART:
        return None
    try:
        return Kind(ns[KIND_PART])
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Metric
# ---------------------------------------------------------------------------

MetricValue = Union[int, float, str]
ConfigValue = Union[bool, int, float, str]


class Metric(BaseModel):
    """A requested metric type, or a measurement once bound and valued."""
    namespace: Namespace
    version: int = 1
    data: Optional[MetricValue] = None
    timestamp: Optional[datetime] = None
    config: Dict[str, ConfigValue] = Field(default_factory=dict)
    unit: str = ""
    description: str = ""


class ScopeKey(NamedTuple):
    """Fetch scope shared by a group of requested metrics."""
    kind: Kind
    namespace: str
    node: str


# ---------------------------------------------------------------------------
# Config policy
# ---------------------------------------------------------------------------

class ConfigRule(BaseModel):
    """A config key callers may attach to requested metrics."""
    prefix: List[str]
    key: str
    type: str = Field(..., description="bool | string | integer | float")
    required: bool = False
    default: Optional[ConfigValue] = None
    description: str = ""


class ConfigPolicy(BaseModel):
    rules: List[ConfigRule] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Collection state (flows through the runtime graph)
# ---------------------------------------------------------------------------

class CollectionState(TypedDict):
    """
    State for one collection cycle.

    Built fresh for every call to ``collect_metrics`` and dropped afterwards;
    nothing is shared between cycles.
    """

    # Caller input
    requested: List[Metric]

    # Pipeline outputs
    collector_config: Any                # CollectorConfig
    client: Any                          # ResourceLister
    scopes: Dict[ScopeKey, List[Metric]]
    metrics: List[Metric]
