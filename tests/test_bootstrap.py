"""Tests for the default container bootstrap."""

# pylint: disable=missing-function-docstring

import json

from locator_engine.bootstrap import build_default_container
from locator_engine.services import runtime


def test_builds_empty_default_container():
    container = build_default_container()
    assert len(container) == 0
    assert runtime.get_default() is container


def test_loads_definitions_file(tmp_path):
    path = tmp_path / "services.json"
    path.write_text(json.dumps({"services": {"store": "collections.OrderedDict"}}), encoding="utf-8")

    container = build_default_container(path, make_default=False)

    assert container.has("store")
    assert runtime.get_default() is None
    assert type(container.get("store")).__name__ == "OrderedDict"
