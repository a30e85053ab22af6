"""Tests for the process-wide default container registry."""

# pylint: disable=missing-function-docstring

import pytest

from locator_engine.core.exceptions import DefaultContainerNotSetError
from locator_engine.services import Container, runtime


def test_default_is_absent_until_set():
    assert runtime.get_default() is None
    with pytest.raises(DefaultContainerNotSetError):
        runtime.require_default()


def test_set_default_and_replace(class_resolver):
    first = Container(class_resolver)
    second = Container(class_resolver)

    runtime.set_default(first)
    assert runtime.get_default() is first
    assert runtime.require_default() is first

    runtime.set_default(second)
    assert runtime.require_default() is second


def test_clear_default(container):
    runtime.set_default(container)
    runtime.clear_default()
    assert runtime.get_default() is None
