"""
Tests for utils.py - debug string form of metrics.
"""

import pytest

from kubestate.models import Metric
from kubestate.namespace import Namespace
from kubestate.utils import format_metric, format_value, write_json


@pytest.mark.parametrize("value, expected", [
    (1, "1"),
    (0, "0"),
    (True, "1"),
    (4.3, "4.3"),
    (3.0, "3"),
    (1000.0, "1000"),
    (555.0, "555"),
    (0.1, "0.1"),
    (0.0, "0"),
    (123456.0, "123456"),
    (2e9, "2e+09"),
    (1e9, "1e+09"),
    (1234567.0, "1.234567e+06"),
    (0.00001, "1e-05"),
    ("text", "text"),
])
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_format_metric():
    """Test the dotted namespace plus value form."""
    mt = Metric(
        namespace=Namespace.new("grafanalabs", "kubestate", "node", "myhost_1", "status", "allocatable", "pods"),
        data=555.0,
    )

    assert format_metric(mt) == "grafanalabs.kubestate.node.myhost_1.status.allocatable.pods 555"


def test_write_json(tmp_path):
    """Test that JSON output creates parent directories."""
    path = write_json([{"a": 1}], tmp_path / "out" / "metrics.json")

    assert path.exists()
    assert path.read_text(encoding="utf-8").startswith("[")
