"""
Tests for node.py - node collector.

Tests use kubernetes client model objects, no real cluster required.
"""

from kubernetes.client import V1Node, V1NodeCondition, V1NodeSpec, V1NodeStatus, V1ObjectMeta

from kubestate import config
from kubestate.catalog import node_metric_types
from kubestate.node import NodeCollector
from kubestate.utils import format_metric

PREFIX = f"{config.VENDOR}.kubestate.node"

NODE = V1Node(
    metadata=V1ObjectMeta(name="127.0.0.1"),
    spec=V1NodeSpec(unschedulable=True),
    status=V1NodeStatus(
        capacity={"cpu": "4.3", "memory": "2G", "pods": "1000"},
        allocatable={"cpu": "3", "memory": "1G", "pods": "555"},
        conditions=[V1NodeCondition(type="OutOfDisk", status="False")],
    ),
)


def test_node_metrics():
    """Test every node metric against a fully populated node."""
    metrics = NodeCollector().collect(node_metric_types(), NODE)

    assert [format_metric(m) for m in metrics] == [
        f"{PREFIX}.127_0_0_1.spec.unschedulable 1",
        f"{PREFIX}.127_0_0_1.status.outofdisk 0",
        f"{PREFIX}.127_0_0_1.status.capacity.cpu.cores 4.3",
        f"{PREFIX}.127_0_0_1.status.capacity.memory.bytes 2e+09",
        f"{PREFIX}.127_0_0_1.status.capacity.pods 1000",
        f"{PREFIX}.127_0_0_1.status.allocatable.cpu.cores 3",
        f"{PREFIX}.127_0_0_1.status.allocatable.memory.bytes 1e+09",
        f"{PREFIX}.127_0_0_1.status.allocatable.pods 555",
    ]


def test_out_of_disk_true():
    """Test that an OutOfDisk condition with status True reports 1."""
    node = V1Node(
        metadata=V1ObjectMeta(name="full"),
        status=V1NodeStatus(conditions=[
            V1NodeCondition(type="Ready", status="True"),
            V1NodeCondition(type="OutOfDisk", status="True"),
        ]),
    )
    outofdisk = [m for m in node_metric_types() if m.namespace.strings()[5] == "outofdisk"]

    metrics = NodeCollector().collect(outofdisk, node)

    assert [format_metric(m) for m in metrics] == [f"{PREFIX}.full.status.outofdisk 1"]


def test_missing_resources_are_skipped():
    """Test that absent capacity/allocatable entries are omitted, not zeroed."""
    node = V1Node(
        metadata=V1ObjectMeta(name="bare"),
        spec=V1NodeSpec(),
        status=V1NodeStatus(capacity={"cpu": "2"}),
    )

    metrics = NodeCollector().collect(node_metric_types(), node)

    assert [format_metric(m) for m in metrics] == [
        f"{PREFIX}.bare.spec.unschedulable 0",
        f"{PREFIX}.bare.status.outofdisk 0",
        f"{PREFIX}.bare.status.capacity.cpu.cores 2",
    ]


def test_node_without_spec_or_status():
    """Test that a node with no spec and no status only reports flags."""
    metrics = NodeCollector().collect(node_metric_types(), V1Node(metadata=V1ObjectMeta(name="n")))

    assert [m.data for m in metrics] == [0, 0]
