"""
Metric catalog - every metric type kubestate can collect.

One pure function per kind. Templates are data: a 3-segment prefix
(vendor, plugin, kind), the kind's dynamic identity slots in layout order,
then the static segments naming the measured field. Nothing here touches
the cluster.
"""

from typing import List

from . import config
from .models import Kind, Metric
from .namespace import Namespace


def _prefix(kind: Kind) -> Namespace:
    return Namespace.new(config.VENDOR, config.PLUGIN_NAME, kind.value)


def _pod_ns() -> Namespace:
    return (
        _prefix(Kind.pod)
        .add_dynamic_element("namespace", "kubernetes namespace")
        .add_dynamic_element("node", "node name")
        .add_dynamic_element("pod", "pod name")
    )


def _container_ns() -> Namespace:
    return (
        _prefix(Kind.container)
        .add_dynamic_element("namespace", "kubernetes namespace")
        .add_dynamic_element("node", "node name")
        .add_dynamic_element("pod", "pod name")
        .add_dynamic_element("container", "container name")
    )


def _node_ns() -> Namespace:
    return _prefix(Kind.node).add_dynamic_element("node", "node name")


def _deployment_ns() -> Namespace:
    return (
        _prefix(Kind.deployment)
        .add_dynamic_element("namespace", "kubernetes namespace")
        .add_dynamic_element("deployment", "deployment name")
    )


def _job_ns() -> Namespace:
    return (
        _prefix(Kind.job)
        .add_dynamic_element("namespace", "kubernetes namespace")
        .add_dynamic_element("job", "job name")
    )


def _metric(ns: Namespace, unit: str, description: str) -> Metric:
    return Metric(
        namespace=ns,
        version=config.PLUGIN_VERSION,
        unit=unit,
        description=description,
    )


def pod_metric_types() -> List[Metric]:
    """Pod phase indicators (one per phase) and ready/scheduled conditions."""
    mts = [
        _metric(
            _pod_ns().add_static_elements("status", "phase", phase),
            "bool",
            f"1 if the pod is in phase {phase}, else 0",
        )
        for phase in config.POD_PHASES
    ]
    mts.append(_metric(
        _pod_ns().add_static_elements("status", "condition", "ready"),
        "bool",
        "1 if the pod Ready condition is True",
    ))
    mts.append(_metric(
        _pod_ns().add_static_elements("status", "condition", "scheduled"),
        "bool",
        "1 if the pod PodScheduled condition is True",
    ))
    return mts


def container_metric_types() -> List[Metric]:
    """Container status indicators and resource requests/limits."""
    statuses = [
        ("restarts", "count", "number of container restarts"),
        ("ready", "bool", "1 if the container passed its readiness probe"),
        ("waiting", "bool", "1 if the container is waiting"),
        ("running", "bool", "1 if the container is running"),
        ("terminated", "bool", "1 if the container has terminated"),
    ]
    mts = [
        _metric(_container_ns().add_static_elements("status", field), unit, description)
        for field, unit, description in statuses
    ]
    for section, verb in (("requested", "requested"), ("limits", "limit")):
        mts.append(_metric(
            _container_ns().add_static_elements(section, "cpu", "cores"),
            "cores",
            f"{verb} cpu in cores",
        ))
        mts.append(_metric(
            _container_ns().add_static_elements(section, "memory", "bytes"),
            "bytes",
            f"{verb} memory in bytes",
        ))
    return mts


def node_metric_types() -> List[Metric]:
    mts = [
        _metric(
            _node_ns().add_static_elements("spec", "unschedulable"),
            "bool",
            "1 if the node is cordoned",
        ),
        _metric(
            _node_ns().add_static_elements("status", "outofdisk"),
            "bool",
            "1 if the node OutOfDisk condition is True",
        ),
    ]
    for section in ("capacity", "allocatable"):
        mts.extend([
            _metric(
                _node_ns().add_static_elements("status", section, "cpu", "cores"),
                "cores",
                f"{section} cpu in cores",
            ),
            _metric(
                _node_ns().add_static_elements("status", section, "memory", "bytes"),
                "bytes",
                f"{section} memory in bytes",
            ),
            _metric(
                _node_ns().add_static_elements("status", section, "pods"),
                "count",
                f"{section} pod slots",
            ),
        ])
    return mts


def deployment_metric_types() -> List[Metric]:
    fields = [
        ("metadata", "generation", "count", "sequence number of the desired state"),
        ("status", "observedgeneration", "count", "generation observed by the controller"),
        ("status", "targetedreplicas", "count", "total replicas targeted by the deployment"),
        ("status", "availablereplicas", "count", "replicas available for at least minReadySeconds"),
        ("status", "unavailablereplicas", "count", "replicas that are still unavailable"),
        ("status", "updatedreplicas", "count", "replicas running the latest template"),
        ("spec", "desiredreplicas", "count", "replicas requested in the spec"),
        ("spec", "paused", "bool", "1 if the deployment is paused"),
    ]
    return [
        _metric(_deployment_ns().add_static_elements(section, field), unit, description)
        for section, field, unit, description in fields
    ]


def job_metric_types() -> List[Metric]:
    fields = [
        ("active", "number of actively running pods"),
        ("succeeded", "number of pods that succeeded"),
        ("failed", "number of pods that failed"),
    ]
    return [
        _metric(_job_ns().add_static_elements("status", field), "count", description)
        for field, description in fields
    ]


def get_metric_types() -> List[Metric]:
    """The full catalog, every kind."""
    return [
        *pod_metric_types(),
        *container_metric_types(),
        *node_metric_types(),
        *deployment_metric_types(),
        *job_metric_types(),
    ]
