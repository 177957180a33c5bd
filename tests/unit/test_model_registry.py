# tests/unit/test_model_registry.py
"""Unit tests for ModelRegistry."""

import pytest

from solid_agent.domain.exceptions import ModelResolutionError
from solid_agent.infrastructure.database import AgentContext, AgentMessage, ModelRegistry, default_model_registry
from tests.factories.fakes import FakeContext, FakeMessage


@pytest.mark.unit
class TestModelRegistry:

    def test_register_uses_class_name(self):
        registry = ModelRegistry()

        registry.register(FakeContext)

        assert registry.resolve("FakeContext") is FakeContext

    def test_register_under_alias(self):
        registry = ModelRegistry()

        registry.register(FakeMessage, name="ChatMessage")

        assert registry.resolve("ChatMessage") is FakeMessage
        assert registry.get("FakeMessage") is None

    def test_register_works_as_decorator(self):
        registry = ModelRegistry()

        @registry.register
        class ChatSession(FakeContext):
            pass

        assert registry.resolve("ChatSession") is ChatSession

    def test_class_resolves_to_itself(self):
        assert ModelRegistry().resolve(FakeContext) is FakeContext

    def test_dotted_path_is_imported(self):
        registry = ModelRegistry()

        assert registry.resolve("tests.factories.fakes.FakeMessage") is FakeMessage
        assert registry.resolve("tests.factories.fakes:FakeContext") is FakeContext

    def test_unknown_name_raises(self):
        registry = ModelRegistry({"AgentContext": FakeContext})

        with pytest.raises(ModelResolutionError) as exc_info:
            registry.resolve("Conversation")

        assert exc_info.value.details == {"model": "Conversation", "registered": ["AgentContext"]}

    def test_bad_import_path_raises(self):
        with pytest.raises(ModelResolutionError):
            ModelRegistry().resolve("tests.factories.fakes.Missing")

        with pytest.raises(ModelResolutionError):
            ModelRegistry().resolve("no_such_module:Model")

    def test_unregister_and_copy(self):
        registry = ModelRegistry({"AgentContext": FakeContext})
        copy = registry.copy()

        registry.unregister("AgentContext")

        assert registry.names() == []
        assert copy.names() == ["AgentContext"]

    def test_default_registry_holds_bundled_tables(self):
        assert default_model_registry.resolve("AgentContext") is AgentContext
        assert default_model_registry.resolve("AgentMessage") is AgentMessage
        assert {"AgentContext", "AgentMessage", "AgentGeneration"} <= set(default_model_registry.names())
