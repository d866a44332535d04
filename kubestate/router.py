"""
Request router - groups requested metrics by fetch scope.

Listing pods or deployments is O(cluster size), so requested metrics are
partitioned by (kind, namespace selector, node selector) and each partition
is fetched once with exactly those selectors.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .models import FETCH_KIND, LAYOUTS, Metric, ScopeKey, kind_of
from .namespace import WILDCARD

logger = logging.getLogger(__name__)


def route_metrics(mts: Sequence[Metric]) -> Dict[ScopeKey, List[Metric]]:
    """
    Partition requested metrics into scope groups.

    Pod and container metrics share the pod bucket. A selector slot that
    still holds the wildcard (or that the kind does not have) selects
    everything. Metrics without a known kind marker, or with denied
    characters in any segment, are dropped before they can pick a scope.

    Args:
        mts: Requested metric types, any mix of kinds

    Returns:
        Mapping of scope key to the metrics in that scope, input order kept
    """
    scopes: Dict[ScopeKey, List[Metric]] = {}
    dropped = 0

    for mt in mts:
        ns = mt.namespace.strings()
        kind = kind_of(ns)
        if kind is None:
            dropped += 1
            continue
        if not mt.namespace.is_valid():
            logger.debug(f"Dropped {mt.namespace.key()}: invalid characters")
            dropped += 1
            continue

        layout = LAYOUTS[kind]
        key = ScopeKey(
            kind=FETCH_KIND[kind],
            namespace=_selector(ns, layout.namespace),
            node=_selector(ns, layout.node),
        )
        scopes.setdefault(key, []).append(mt)

    if dropped:
        logger.debug(f"Dropped {dropped} unroutable metrics")
    logger.debug(f"Routed {len(mts) - dropped} metrics into {len(scopes)} scopes")
    return scopes


def _selector(ns: List[str], idx: Optional[int]) -> str:
    if idx is None or idx >= len(ns) or not ns[idx]:
        return WILDCARD
    return ns[idx]
