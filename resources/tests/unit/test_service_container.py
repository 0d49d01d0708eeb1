"""
Unit tests for the ServiceContainer.
"""

from abc import ABC, abstractmethod

import pytest

from mcp_extension.core.container import ServiceContainer
from mcp_extension.core.interfaces import IEntityRepository
from mcp_extension.services.entities import StaticEntityRepository
from mcp_extension.utils.config import ExtensionSettings
from mcp_extension.utils.errors import ConfigurationError

pytestmark = pytest.mark.unit


class IGreeter(ABC):
    @abstractmethod
    def greet(self) -> str:
        pass


class Greeter(IGreeter):
    def __init__(self, greeting: str = "hello"):
        self.greeting = greeting
        self.closed = False

    def greet(self) -> str:
        return self.greeting

    def close(self) -> None:
        self.closed = True


class NotAGreeter:
    pass


class UsesRepository:
    def __init__(self, entities: IEntityRepository, settings: ExtensionSettings):
        self.entities = entities
        self.settings = settings


class UsesSettingsByName:
    def __init__(self, settings):
        self.settings = settings


class NeedsGreeter:
    def __init__(self, greeter: IGreeter):
        self.greeter = greeter


class ServiceA:
    def __init__(self, b: "ServiceB"):
        self.b = b


class ServiceB:
    def __init__(self, a: ServiceA):
        self.a = a


@pytest.fixture
def container(settings):
    return ServiceContainer(settings)


class TestRegistration:
    """Test registering and resolving services."""

    def test_singleton_returns_same_instance(self, container):
        container.register(IGreeter, Greeter)

        first = container.get(IGreeter)
        second = container.get(IGreeter)

        assert isinstance(first, Greeter)
        assert first is second

    def test_transient_returns_new_instances(self, container):
        container.register(IGreeter, Greeter, singleton=False)

        assert container.get(IGreeter) is not container.get(IGreeter)

    def test_register_instance(self, container):
        greeter = Greeter("hi")
        container.register_instance(IGreeter, greeter)

        assert container.has(IGreeter)
        assert container.get(IGreeter) is greeter

    def test_factory(self, container):
        container.register(IGreeter, factory=lambda: Greeter("from factory"))

        assert container.get(IGreeter).greet() == "from factory"

    def test_explicit_arguments(self, container):
        container.register(IGreeter, Greeter, arguments={"greeting": "bonjour"})

        assert container.get(IGreeter).greet() == "bonjour"

    def test_implementation_must_implement_interface(self, container):
        with pytest.raises(ConfigurationError, match="does not implement"):
            container.register(IGreeter, NotAGreeter)

    def test_interface_must_be_a_class(self, container):
        with pytest.raises(ConfigurationError, match="must be a class"):
            container.register(lambda: None, Greeter)

    def test_unregistered_service(self, container):
        with pytest.raises(ConfigurationError, match="not registered") as exc_info:
            container.get(IGreeter)

        assert exc_info.value.suggestions

    def test_reregistering_replaces_singleton(self, container):
        container.register(IGreeter, Greeter, arguments={"greeting": "one"})
        assert container.get(IGreeter).greet() == "one"

        container.register(IGreeter, Greeter, arguments={"greeting": "two"})
        assert container.get(IGreeter).greet() == "two"


class TestAutowiring:
    """Test constructor parameter resolution."""

    def test_resolves_by_annotation(self, container, settings):
        repository = StaticEntityRepository()
        container.register_instance(IEntityRepository, repository)

        instance = container.create_instance(UsesRepository)

        assert instance.entities is repository
        assert instance.settings is settings

    def test_settings_by_parameter_name(self, container, settings):
        assert container.create_instance(UsesSettingsByName).settings is settings

    def test_default_used_when_unregistered(self, container):
        assert container.create_instance(Greeter).greet() == "hello"

    def test_missing_dependency(self, container):
        with pytest.raises(ConfigurationError, match="Cannot resolve parameter 'greeter'") as exc_info:
            container.create_instance(NeedsGreeter)

        assert exc_info.value.context["class"] == "NeedsGreeter"

    def test_unknown_argument(self, container):
        with pytest.raises(ConfigurationError, match="no constructor parameters"):
            container.create_instance(Greeter, {"salutation": "hey"})

    def test_circular_dependency(self, container):
        container.register(ServiceA)
        container.register(ServiceB)

        with pytest.raises(ConfigurationError, match="Circular dependency"):
            container.get(ServiceA)


class TestLifecycle:
    """Test warm-up and disposal."""

    def test_warm_up_builds_singletons(self, container):
        container.register(IGreeter, Greeter)
        container.warm_up()

        info = container.get_service_info()
        assert info["singleton_instances"] == 1
        assert info["services"]["IGreeter"]["has_instance"] is True

    def test_warm_up_surfaces_wiring_errors(self, container):
        container.register(NeedsGreeter)

        with pytest.raises(ConfigurationError):
            container.warm_up()

    def test_dispose_closes_services(self, container):
        container.register(IGreeter, Greeter)
        greeter = container.get(IGreeter)

        container.dispose()

        assert greeter.closed
        assert not container.has(IGreeter)

    def test_context_manager(self, settings):
        with ServiceContainer(settings) as container:
            container.register(IGreeter, Greeter)
            greeter = container.get(IGreeter)

        assert greeter.closed
