"""
Tests for namespace.py - hierarchical metric names.
"""

import pytest

from kubestate.namespace import WILDCARD, Namespace, slugify


def _template():
    return (
        Namespace.new("grafanalabs", "kubestate", "job")
        .add_dynamic_element("namespace", "kubernetes namespace")
        .add_dynamic_element("job", "job name")
        .add_static_elements("status", "active")
    )


def test_builder_and_strings():
    """Test that dynamic elements start as wildcards between static ones."""
    ns = _template()

    assert ns.strings() == ["grafanalabs", "kubestate", "job", "*", "*", "status", "active"]
    assert ns.key() == "grafanalabs.kubestate.job.*.*.status.active"
    assert ns.is_dynamic() == (True, [3, 4])
    assert len(ns) == 7


def test_builder_does_not_mutate_receiver():
    """Test that adding elements returns a new namespace."""
    base = Namespace.new("a", "b")

    longer = base.add_static_element("c")

    assert base.strings() == ["a", "b"]
    assert longer.strings() == ["a", "b", "c"]


def test_with_values_copies():
    """Test that binding produces a fresh namespace and keeps metadata."""
    template = _template()
    values = template.strings()
    values[3], values[4] = "default", "job1"

    bound = template.with_values(values)
    values[3] = "changed"

    assert bound.strings()[3:5] == ["default", "job1"]
    assert template.strings()[3:5] == [WILDCARD, WILDCARD]
    assert bound.element(4).name == "job"
    assert bound.element(4).description == "job name"
    assert bound.elements[0] is not template.elements[0]


def test_with_values_length_mismatch():
    """Test that values must cover every element."""
    with pytest.raises(ValueError):
        _template().with_values(["only", "three", "values"])


def test_element_out_of_range():
    """Test that out-of-range lookups return an empty element."""
    element = _template().element(99)

    assert element.value == ""
    assert not element.is_dynamic()


@pytest.mark.parametrize("bad", ["^", "a.b", "a b", "x/y", "(", "q'", "semi;", "pipe|"])
def test_invalid_characters(bad):
    """Test that any denied character invalidates the whole namespace."""
    values = _template().strings()
    values[3] = bad

    assert not _template().with_values(values).is_valid()


def test_valid_namespace():
    """Test that wildcards, dashes and underscores are allowed."""
    values = _template().strings()
    values[3] = "kube-system"
    values[4] = "job_1"

    assert _template().is_valid()
    assert _template().with_values(values).is_valid()


def test_slugify():
    """Test that dots become underscores and None becomes empty."""
    assert slugify("127.0.0.1") == "127_0_0_1"
    assert slugify("node-1") == "node-1"
    assert slugify(None) == ""
