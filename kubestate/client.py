"""Cluster client — lists pods, nodes, deployments and jobs via the official API.

Wraps the ``kubernetes`` client so the rest of the package only sees one
call: ``list(kind, namespace, node)`` with ``*`` meaning "any".
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import urllib3
from kubernetes import client, config as k8s_config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from kubestate.config import CollectorConfig
from kubestate.errors import ClientConfigError, FetchError
from kubestate.models import Kind
from kubestate.namespace import WILDCARD

logger = logging.getLogger(__name__)


class ResourceLister(Protocol):
    def list(self, kind: Kind, namespace: str = WILDCARD, node: str = WILDCARD) -> list[Any]:
        ...


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class KubeClient:
    """Thin selector-aware wrapper over the CoreV1, AppsV1 and BatchV1 APIs."""

    def __init__(self, api_client: client.ApiClient):
        self.api_client = api_client
        self.core_v1 = client.CoreV1Api(api_client)
        self.apps_v1 = client.AppsV1Api(api_client)
        self.batch_v1 = client.BatchV1Api(api_client)

    def list(self, kind: Kind, namespace: str = WILDCARD, node: str = WILDCARD) -> list[Any]:
        """List objects of *kind* matching the selectors.

        Raises:
            FetchError: If the API call fails.
            ValueError: If *kind* is not a fetchable kind.
        """
        kind = Kind(kind)
        logger.debug("Listing %s (namespace=%s, node=%s)", kind.value, namespace, node)
        try:
            if kind == Kind.pod:
                result = self._list_pods(namespace, node)
            elif kind == Kind.node:
                result = self._list_nodes(node)
            elif kind == Kind.deployment:
                result = self._list_namespaced(
                    namespace,
                    self.apps_v1.list_deployment_for_all_namespaces,
                    self.apps_v1.list_namespaced_deployment,
                )
            elif kind == Kind.job:
                result = self._list_namespaced(
                    namespace,
                    self.batch_v1.list_job_for_all_namespaces,
                    self.batch_v1.list_namespaced_job,
                )
            else:
                raise ValueError(f"cannot list resources of kind {kind.value!r}")
        except (ApiException, urllib3.exceptions.HTTPError) as exc:
            logger.error("Failed to list %s: %s", kind.value, exc)
            raise FetchError(kind.value, namespace, node, exc) from exc

        return list(result.items or [])

    def _list_pods(self, namespace: str, node: str) -> Any:
        kwargs = {}
        if node != WILDCARD:
            kwargs["field_selector"] = f"spec.nodeName={node}"
        if namespace == WILDCARD:
            return self.core_v1.list_pod_for_all_namespaces(**kwargs)
        return self.core_v1.list_namespaced_pod(namespace, **kwargs)

    def _list_nodes(self, node: str) -> Any:
        if node == WILDCARD:
            return self.core_v1.list_node()
        return self.core_v1.list_node(field_selector=f"metadata.name={node}")

    @staticmethod
    def _list_namespaced(namespace: str, list_all: Any, list_one: Any) -> Any:
        if namespace == WILDCARD:
            return list_all()
        return list_one(namespace)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def new_client(cfg: CollectorConfig) -> KubeClient:
    """Create a client from in-cluster credentials or a kubeconfig file.

    Raises:
        ClientConfigError: If the configuration cannot be loaded.
    """
    configuration = client.Configuration()
    try:
        if cfg.incluster:
            k8s_config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster config successfully")
        else:
            k8s_config.load_kube_config(
                config_file=cfg.kubeconfigpath or None,
                client_configuration=configuration,
                persist_config=False,
            )
            logger.info("Loaded kubeconfig %s successfully", cfg.kubeconfigpath)
    except (ConfigException, OSError, TypeError, ValueError) as exc:
        logger.error("Failed to read the Kubernetes api client config: %s", exc)
        raise ClientConfigError(f"Unable to configure Kubernetes client: {exc}") from exc

    return KubeClient(client.ApiClient(configuration))
