"""Tests for attribute-style service access."""

# pylint: disable=missing-function-docstring

import pytest

from locator_engine.core.exceptions import ServiceNotFoundError
from locator_engine.services import ServiceAccessor


def test_attribute_lookup_delegates_to_get(container):
    container.set("clock", object)
    services = ServiceAccessor(container)

    assert services.container is container
    assert services.clock is not services.clock


def test_shared_view_uses_get_shared(container):
    container.set("clock", object)
    services = ServiceAccessor(container)

    assert services.shared.clock is services.shared.clock


def test_unknown_service_raises_not_found(container):
    with pytest.raises(ServiceNotFoundError):
        ServiceAccessor(container).missing  # pylint: disable=expression-not-assigned


def test_private_names_are_not_services(container):
    container.set("_hidden", object)
    with pytest.raises(AttributeError):
        ServiceAccessor(container)._hidden  # pylint: disable=protected-access,expression-not-assigned


def test_dir_lists_registered_ids(container):
    container.set("clock", object)
    assert "clock" in dir(ServiceAccessor(container))


def test_reserved_names_resolve_through_item_access(container):
    container.set("shared", lambda: "shared-service")
    container.set_shared("container", object)
    services = ServiceAccessor(container)

    assert isinstance(services.shared, ServiceAccessor)
    assert services.container is container
    assert services["shared"] == "shared-service"
    assert services.shared["container"] is services["container"]
