"""Error taxonomy for kubestate.

Only cross-cutting failures (configuration, client construction, fetching)
ever leave the package. Extraction problems are handled locally by the
collectors and never surface here.
"""

from __future__ import annotations


class KubestateError(RuntimeError):
    """Base class for every error raised out of a collection cycle."""


class ConfigError(KubestateError):
    """A requested metric carried a config value of the wrong type."""


class ClientConfigError(KubestateError):
    """The Kubernetes API client could not be configured or created."""


class FetchError(KubestateError):
    """Listing resources from the Kubernetes API failed."""

    def __init__(self, kind: str, namespace: str, node: str, cause: Exception):
        self.kind = kind
        self.namespace = namespace
        self.node = node
        self.cause = cause
        super().__init__(
            f"Failed to list {kind} (namespace={namespace}, node={node}): {cause}"
        )
