"""
LangGraph runtime - orchestrates one collection cycle.

Builds a StateGraph that resolves config, connects to the cluster, routes the
requested metrics into scope groups and collects every group. Each call to
``collect_metrics`` runs the graph on a fresh state; nothing is kept between
cycles.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from langgraph.graph import END, StateGraph

from .catalog import get_metric_types
from .client import ResourceLister, new_client
from .collectors import COLLECTORS, CollectorMap
from .config import CollectorConfig, get_config_policy, resolve_config
from .models import CollectionState, ConfigPolicy, Metric
from .router import route_metrics

logger = logging.getLogger(__name__)

ClientFactory = Callable[[CollectorConfig], ResourceLister]


class Kubestate:
    """
    Kubernetes state collector.

    Both the client factory and the collector map are injected so tests can
    substitute a fake cluster without touching module state.
    """

    def __init__(
        self,
        client_factory: ClientFactory = new_client,
        collectors: Optional[CollectorMap] = None,
    ):
        self.client_factory = client_factory
        self.collectors = collectors if collectors is not None else COLLECTORS
        self.graph = self._build_graph()

    # -- plugin surface -----------------------------------------------------

    def get_metric_types(self, cfg: Optional[Dict[str, Any]] = None) -> List[Metric]:
        """Every metric type this collector supports."""
        return get_metric_types()

    def get_config_policy(self) -> ConfigPolicy:
        return get_config_policy()

    def collect_metrics(self, mts: Sequence[Metric]) -> List[Metric]:
        """
        Collect measurements for the requested metric types.

        Args:
            mts: Requested metric types, dynamic segments wildcard or bound

        Returns:
            Flat, unordered list of measurements

        Raises:
            ConfigError: If the requested metrics carry malformed config
            ClientConfigError: If the cluster client cannot be created
            FetchError: If listing any scope fails
        """
        logger.debug(f"Request to collect metrics: {len(mts)} metric types")
        if not mts:
            return []

        initial_state: CollectionState = {
            "requested": list(mts),
            "collector_config": None,
            "client": None,
            "scopes": {},
            "metrics": [],
        }
        result = self.graph.invoke(initial_state)

        logger.info(f"Collecting metrics completed: {len(result['metrics'])} metrics")
        return result["metrics"]

    # -- graph --------------------------------------------------------------

    def _build_graph(self) -> Any:
        """
        Build the collection graph.

        Graph flow:
        1. resolve_config: read incluster/kubeconfigpath
        2. connect: create the cluster client
        3. route: group requested metrics by fetch scope
        4. collect: list each scope and run its collectors
        5. END
        """
        builder = StateGraph(CollectionState)

        builder.add_node("resolve_config", self._resolve_config)
        builder.add_node("connect", self._connect)
        builder.add_node("route", self._route)
        builder.add_node("collect", self._collect)

        builder.add_edge("resolve_config", "connect")
        builder.add_edge("connect", "route")
        builder.add_edge("route", "collect")
        builder.add_edge("collect", END)

        builder.set_entry_point("resolve_config")

        return builder.compile()

    def _resolve_config(self, state: CollectionState) -> Dict[str, Any]:
        return {"collector_config": resolve_config(state["requested"])}

    def _connect(self, state: CollectionState) -> Dict[str, Any]:
        return {"client": self.client_factory(state["collector_config"])}

    def _route(self, state: CollectionState) -> Dict[str, Any]:
        return {"scopes": route_metrics(state["requested"])}

    def _collect(self, state: CollectionState) -> Dict[str, Any]:
        lister = state["client"]
        metrics: List[Metric] = []

        for scope, mts in state["scopes"].items():
            collectors = self.collectors.get(scope.kind, ())
            if not collectors:
                continue

            objects = lister.list(scope.kind, scope.namespace, scope.node)
            logger.debug(
                f"Scope {scope.kind.value} namespace={scope.namespace} node={scope.node}: "
                f"{len(objects)} objects, {len(mts)} metric types"
            )
            for obj in objects:
                for collector in collectors:
                    metrics.extend(collector.collect(mts, obj))

        return {"metrics": metrics}
