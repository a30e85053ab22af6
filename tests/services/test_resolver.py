"""Tests for construction strategies, setter calls and container injection."""

# pylint: disable=missing-function-docstring,too-few-public-methods

import pytest

from locator_engine.core.arguments import InlineInstance, LiteralArg, ServiceRef
from locator_engine.core.definition import ServiceDefinition, Strategy
from locator_engine.core.exceptions import (
    CircularDependencyError,
    ResolutionError,
    ServiceNotFoundError,
)
from locator_engine.core.ports import ContainerAware, ContainerAwareMixin
from locator_engine.services import ResolutionContext


class Point:
    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y


class Mailer:
    def __init__(self, transport="smtp"):
        self.transport = transport
        self.events = []
        self.sender = None
        self.retries = None

    def set_sender(self, sender):
        self.events.append(("set_sender", sender, self.retries))
        self.sender = sender

    def enable(self):
        self.events.append(("enable",))


class AwareService(ContainerAwareMixin):
    def __init__(self, *args):
        self.args = args


def make_aware_service():
    return AwareService()


class Exploding:
    def __init__(self):
        raise ValueError("boom")


@pytest.fixture
def registry(class_resolver):
    for cls in (Point, Mailer, AwareService, Exploding):
        class_resolver.register(cls.__name__, cls)
    return class_resolver


class TestStrategies:
    """Each strategy produces instances its own way."""

    def test_class_name_strategy_calls_no_arg_constructor(self, container, registry):
        container.set("point", "Point")
        point = container.get("point")
        assert (point.x, point.y) == (0, 0)

    def test_class_name_strategy_forwards_call_time_arguments(self, container, registry):
        container.set("point", Point)
        point = container.get("point", [3, 4])
        assert (point.x, point.y) == (3, 4)

    def test_factory_receives_call_time_arguments(self, container):
        received = []

        def factory(*args):
            received.append(args)
            return Point(*args)

        container.set("point", factory)
        container.get("point")
        container.get("point", [1, 2])

        assert received == [(), (1, 2)]

    def test_instance_strategy_returns_same_object_and_ignores_arguments(self, container):
        point = Point(5, 6)
        container.set("point", point)

        assert container.get("point") is point
        assert container.get("point", [1, 2]) is point
        assert container.get_definition("point").strategy is Strategy.INSTANCE

    def test_declarative_uses_recipe_arguments(self, container, registry):
        container.set("point", {"className": "Point", "arguments": [7, 8]})
        point = container.get("point")
        assert (point.x, point.y) == (7, 8)

    def test_call_time_arguments_replace_recipe_arguments(self, container, registry):
        container.set("point", {"className": "Point", "arguments": [7, 8]})
        point = container.get("point", [1])
        assert (point.x, point.y) == (1, 0)

    def test_empty_call_time_arguments_keep_recipe_arguments(self, container, registry):
        container.set("point", {"className": "Point", "arguments": [7, 8]})
        point = container.get("point", [])
        assert (point.x, point.y) == (7, 8)


class TestDeclarativeRecipes:
    """Setter calls and property assignments run after construction."""

    def test_setters_then_properties_in_declared_order(self, container, registry):
        container.set("sender", lambda: "noreply@example.org")
        container.set(
            "mailer",
            {
                "className": "Mailer",
                "arguments": [{"type": "parameter", "value": "ses"}],
                "calls": [
                    {"method": "enable"},
                    {"method": "set_sender", "arguments": [{"type": "service", "name": "sender"}]},
                ],
                "properties": [{"name": "retries", "value": {"type": "parameter", "value": 3}}],
            },
        )

        mailer = container.get("mailer")

        assert mailer.transport == "ses"
        assert mailer.events == [("enable",), ("set_sender", "noreply@example.org", None)]
        assert mailer.retries == 3

    def test_programmatic_recipe(self, container, registry):
        definition = container.set("mailer", {"className": "Mailer"})
        definition.append_setter_call("set_sender", [LiteralArg("ops@example.org")])
        definition.append_property_assignment("retries", 5)

        mailer = container.get("mailer")

        assert mailer.sender == "ops@example.org"
        assert mailer.retries == 5

    def test_missing_setter_raises_resolution_error(self, container, registry):
        definition = container.set("mailer", {"className": "Mailer"})
        definition.append_setter_call("does_not_exist")

        with pytest.raises(ResolutionError) as excinfo:
            container.get("mailer")

        assert excinfo.value.service_id == "mailer"
        assert isinstance(excinfo.value.__cause__, AttributeError)
        assert "does_not_exist" in str(excinfo.value)

    def test_inline_instance_argument(self, container, registry):
        container.set("y", lambda: 9)
        container.set(
            "mailer",
            {
                "className": "Mailer",
                "arguments": [
                    {
                        "type": "instance",
                        "className": "Point",
                        "arguments": [1, {"type": "service", "name": "y"}],
                    }
                ],
            },
        )

        transport = container.get("mailer").transport

        assert isinstance(transport, Point)
        assert (transport.x, transport.y) == (1, 9)
        assert not container.has("Point")

    def test_inline_instances_are_never_shared(self, container, registry):
        container.set("a", {"className": "Mailer", "arguments": [InlineInstance("Point")]})
        assert container.get("a").transport is not container.get("a").transport

    def test_unknown_inline_class_names_the_owning_service(self, container, registry):
        container.set("a", {"className": "Mailer", "arguments": [InlineInstance("Missing")]})
        with pytest.raises(ResolutionError) as excinfo:
            container.get("a")
        assert excinfo.value.service_id == "a"
        assert isinstance(excinfo.value.__cause__, LookupError)


class TestErrors:
    """Failures surface as container errors carrying the offending id."""

    def test_constructor_failure_is_wrapped(self, container, registry):
        container.set("boom", "Exploding")
        with pytest.raises(ResolutionError) as excinfo:
            container.get("boom")
        assert excinfo.value.service_id == "boom"
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_factory_failure_is_wrapped(self, container):
        def factory():
            raise RuntimeError("down")

        container.set("db", factory)
        with pytest.raises(ResolutionError) as excinfo:
            container.get("db")
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_unresolvable_registered_class_name(self, container):
        container.set("thing", "NoSuchClass")
        with pytest.raises(ResolutionError) as excinfo:
            container.get("thing")
        assert isinstance(excinfo.value.__cause__, LookupError)

    def test_fallback_constructor_failure_is_wrapped(self, container, registry):
        with pytest.raises(ResolutionError) as excinfo:
            container.get("Exploding")
        assert excinfo.value.service_id == "Exploding"

    def test_failed_shared_construction_is_not_cached(self, container):
        attempts = []

        def flaky():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first call fails")
            return Point()

        container.set_shared("flaky", flaky)
        with pytest.raises(ResolutionError):
            container.get("flaky")

        assert isinstance(container.get("flaky"), Point)
        assert container.get("flaky") is container.get("flaky")
        assert len(attempts) == 2

    def test_nested_not_found_is_not_wrapped(self, container, registry):
        container.set("mailer", {"className": "Mailer", "arguments": [ServiceRef("nope")]})
        with pytest.raises(ServiceNotFoundError):
            container.get("mailer")

    def test_chain_is_cleared_after_failure(self, container, registry):
        container.set("a", {"className": "Point", "arguments": [ServiceRef("a")]})
        with pytest.raises(CircularDependencyError):
            container.get("a")
        assert ResolutionContext.chain() == ()


class TestContainerAware:
    """Container-aware instances receive their owning container."""

    def test_mixin_satisfies_protocol(self):
        assert isinstance(AwareService(), ContainerAware)
        assert not isinstance(Point(), ContainerAware)

    @pytest.mark.parametrize(
        "spec",
        [
            "AwareService",
            AwareService,
            {"className": "AwareService", "arguments": [1]},
            make_aware_service,
        ],
        ids=["class-name", "class", "declarative", "factory"],
    )
    def test_injected_for_constructed_strategies(self, container, registry, spec):
        container.set("svc", spec)
        assert container.get("svc").get_container() is container

    def test_injected_for_instance_strategy(self, container):
        service = AwareService()
        container.set("svc", service)
        assert container.get("svc").get_container() is container

    def test_injected_for_fallback_and_inline_instances(self, container, registry):
        assert container.get("AwareService").get_container() is container

        container.set("holder", {"className": "Point", "arguments": [InlineInstance("AwareService")]})
        assert container.get("holder").x.get_container() is container

    def test_not_injected_before_resolution(self):
        assert AwareService().get_container() is None


def test_resolution_context_rejects_reentry():
    with ResolutionContext.enter("a") as chain:
        assert chain == ("a",)
        with ResolutionContext.enter("b"):
            assert ResolutionContext.chain() == ("a", "b")
            with pytest.raises(CircularDependencyError) as excinfo:
                with ResolutionContext.enter("a"):
                    pass
            assert excinfo.value.chain == ("a", "b", "a")
    assert ResolutionContext.chain() == ()


def test_definition_marked_resolved_after_success(container):
    definition = ServiceDefinition("p", Strategy.FACTORY, Point)
    container.set_definition(definition)
    assert definition.is_resolved() is False
    container.get("p")
    assert definition.is_resolved() is True
