"""kubestate configuration — constants, defaults, per-request config.

All tunables live here so collectors stay free of magic strings.
Override at runtime via environment variables, CLI flags or the config map
carried by the requested metrics.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

from pydantic import BaseModel

from kubestate.errors import ConfigError
from kubestate.models import ConfigPolicy, ConfigRule, Metric

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Plugin identity
# ---------------------------------------------------------------------------

PLUGIN_NAME: str = "kubestate"
PLUGIN_VERSION: int = 1
VENDOR: str = os.getenv("KUBESTATE_VENDOR", "grafanalabs")

# ---------------------------------------------------------------------------
# Cluster access defaults
# ---------------------------------------------------------------------------

DEFAULT_INCLUSTER: bool = _env_bool("KUBESTATE_INCLUSTER", "true")
DEFAULT_KUBECONFIG: str = os.getenv(
    "KUBESTATE_KUBECONFIG", os.path.expanduser("~/.kube/config")
)

# ---------------------------------------------------------------------------
# Kubernetes constants read by the collectors
# ---------------------------------------------------------------------------

CONDITION_TRUE: str = "True"

POD_PHASES: tuple[str, ...] = ("Pending", "Running", "Succeeded", "Failed", "Unknown")

# Legacy "limits.*" names are still honoured for old pod specs.
LIMIT_KEYS: dict[str, tuple[str, ...]] = {
    "cpu": ("cpu", "limits.cpu"),
    "memory": ("memory", "limits.memory"),
}
REQUEST_KEYS: dict[str, tuple[str, ...]] = {
    "cpu": ("cpu",),
    "memory": ("memory",),
}


# ---------------------------------------------------------------------------
# Per-cycle configuration
# ---------------------------------------------------------------------------

class CollectorConfig(BaseModel):
    """How a collection cycle reaches the cluster."""
    incluster: bool = DEFAULT_INCLUSTER
    kubeconfigpath: str = DEFAULT_KUBECONFIG


def resolve_config(mts: Sequence[Metric]) -> CollectorConfig:
    """Build the cycle config from the first requested metric.

    Keys missing from the metric's config map fall back to the environment
    defaults.

    Raises:
        ConfigError: If a key is present with the wrong type.
    """
    cfg: dict[str, Any] = dict(mts[0].config) if mts else {}

    incluster = _get_bool(cfg, "incluster", DEFAULT_INCLUSTER)
    kubeconfigpath = _get_string(cfg, "kubeconfigpath", DEFAULT_KUBECONFIG)

    logger.debug("Resolved config: incluster=%s kubeconfigpath=%s", incluster, kubeconfigpath)
    return CollectorConfig(incluster=incluster, kubeconfigpath=kubeconfigpath)


def _get_bool(cfg: dict[str, Any], key: str, default: bool) -> bool:
    value = cfg.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ConfigError(f"config value {key!r} must be a bool, got {value!r}")


def _get_string(cfg: dict[str, Any], key: str, default: str) -> str:
    value: Optional[Any] = cfg.get(key)
    if value is None or value == "":
        return default
    if not isinstance(value, str):
        raise ConfigError(f"config value {key!r} must be a string, got {value!r}")
    return os.path.expanduser(value)


def get_config_policy() -> ConfigPolicy:
    """Return the config keys a caller may attach to requested metrics."""
    prefix = [VENDOR, PLUGIN_NAME]
    return ConfigPolicy(rules=[
        ConfigRule(
            prefix=prefix,
            key="incluster",
            type="bool",
            required=False,
            default=DEFAULT_INCLUSTER,
            description="Use the service account mounted into the pod",
        ),
        ConfigRule(
            prefix=prefix,
            key="kubeconfigpath",
            type="string",
            required=False,
            default=DEFAULT_KUBECONFIG,
            description="Path to a kubeconfig file when running outside the cluster",
        ),
    ])
