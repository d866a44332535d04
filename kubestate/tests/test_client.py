"""
Tests for client.py - selector translation and error wrapping.

The kubernetes API classes are replaced with mocks, no real cluster required.
"""

from unittest.mock import MagicMock, patch

import pytest
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import MaxRetryError

from kubestate.client import KubeClient, new_client
from kubestate.config import CollectorConfig
from kubestate.errors import ClientConfigError, FetchError
from kubestate.models import Kind


def _client():
    kc = KubeClient(MagicMock())
    kc.core_v1 = MagicMock()
    kc.apps_v1 = MagicMock()
    kc.batch_v1 = MagicMock()
    return kc


def _items(*items):
    return MagicMock(items=list(items))


def test_list_pods_all_namespaces():
    """Test that wildcard selectors list every pod."""
    kc = _client()
    kc.core_v1.list_pod_for_all_namespaces.return_value = _items("p1", "p2")

    assert kc.list(Kind.pod) == ["p1", "p2"]
    kc.core_v1.list_pod_for_all_namespaces.assert_called_once_with()


def test_list_pods_by_namespace_and_node():
    """Test that a node selector becomes a spec.nodeName field selector."""
    kc = _client()
    kc.core_v1.list_namespaced_pod.return_value = _items("p1")

    assert kc.list(Kind.pod, "default", "node1") == ["p1"]
    kc.core_v1.list_namespaced_pod.assert_called_once_with(
        "default", field_selector="spec.nodeName=node1"
    )


def test_list_pods_by_node_only():
    kc = _client()
    kc.core_v1.list_pod_for_all_namespaces.return_value = _items()

    assert kc.list(Kind.pod, "*", "node1") == []
    kc.core_v1.list_pod_for_all_namespaces.assert_called_once_with(
        field_selector="spec.nodeName=node1"
    )


def test_list_nodes():
    """Test that a node selector filters by metadata.name."""
    kc = _client()
    kc.core_v1.list_node.return_value = _items("n1")

    assert kc.list(Kind.node, "*", "n1") == ["n1"]
    kc.core_v1.list_node.assert_called_once_with(field_selector="metadata.name=n1")


def test_list_deployments_and_jobs():
    """Test namespaced and cluster-wide deployment/job listing."""
    kc = _client()
    kc.apps_v1.list_namespaced_deployment.return_value = _items("d1")
    kc.batch_v1.list_job_for_all_namespaces.return_value = _items("j1")

    assert kc.list(Kind.deployment, "default") == ["d1"]
    assert kc.list(Kind.job) == ["j1"]
    kc.apps_v1.list_namespaced_deployment.assert_called_once_with("default")
    kc.batch_v1.list_job_for_all_namespaces.assert_called_once_with()


def test_none_items_is_empty():
    kc = _client()
    kc.batch_v1.list_namespaced_job.return_value = MagicMock(items=None)

    assert kc.list(Kind.job, "batch") == []


def test_unknown_kind():
    """Test that containers cannot be listed on their own."""
    with pytest.raises(ValueError):
        _client().list(Kind.container)


@pytest.mark.parametrize("error", [
    ApiException(status=403, reason="Forbidden"),
    MaxRetryError(pool=None, url="/api/v1/pods"),
])
def test_fetch_errors_wrapped(error):
    """Test that API and transport errors become FetchError."""
    kc = _client()
    kc.core_v1.list_pod_for_all_namespaces.side_effect = error

    with pytest.raises(FetchError) as exc_info:
        kc.list(Kind.pod)

    assert exc_info.value.kind == "pod"
    assert exc_info.value.cause is error


def test_new_client_incluster():
    """Test that in-cluster config is loaded into a private configuration."""
    with patch("kubestate.client.k8s_config.load_incluster_config") as load:
        kc = new_client(CollectorConfig(incluster=True))

    assert isinstance(kc, KubeClient)
    assert load.call_count == 1
    assert "client_configuration" in load.call_args.kwargs


def test_new_client_kubeconfig():
    """Test that the kubeconfig path is passed through."""
    with patch("kubestate.client.k8s_config.load_kube_config") as load:
        new_client(CollectorConfig(incluster=False, kubeconfigpath="/tmp/kubeconfig"))

    assert load.call_args.kwargs["config_file"] == "/tmp/kubeconfig"
    assert load.call_args.kwargs["persist_config"] is False


def test_new_client_failure():
    """Test that configuration errors surface as ClientConfigError."""
    with patch(
        "kubestate.client.k8s_config.load_incluster_config",
        side_effect=ConfigException("Service host/port is not set."),
    ):
        with pytest.raises(ClientConfigError):
            new_client(CollectorConfig(incluster=True))
