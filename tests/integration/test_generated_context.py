# tests/integration/test_generated_context.py
"""
Integration tests for context tables written by the context scaffold.

The "conversation" models module is generated once per test module and
imported, which adds its tables to SQLModel metadata before the
``database`` fixture creates them.
"""

import importlib.util
import sys

import pytest

from solid_agent import Agent, HasContext, has_context
from solid_agent.infrastructure.database import default_model_registry
from solid_agent.scaffold.context import ContextNames, write_context_models

MODULE_NAME = "generated_conversation_models"


@pytest.fixture(scope="module")
def conversation_models(tmp_path_factory):
    path = write_context_models(tmp_path_factory.mktemp("models"), ContextNames.from_name("conversation"))
    spec = importlib.util.spec_from_file_location(MODULE_NAME, path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[MODULE_NAME] = module
    spec.loader.exec_module(module)
    return module


@pytest.mark.integration
class TestGeneratedContextTables:

    def test_messages_and_generations_use_generated_tables(self, database, conversation_models, make_response):
        Conversation = conversation_models.Conversation
        context = Conversation.create(agent_name="ChatAgent", action_name="chat")

        context.add_message("user", "Hi", position=7)
        context.record_generation(make_response("Hello!", input_tokens=3, output_tokens=2))
        database.remove_session()

        reloaded = Conversation.find(context.id)
        assert [type(m) for m in reloaded.messages] == [conversation_models.ConversationMessage] * 2
        assert [(m.role, m.content, m.position) for m in reloaded.messages] == [
            ("user", "Hi", 0),
            ("assistant", "Hello!", 1),
        ]
        assert isinstance(reloaded.generations[0], conversation_models.ConversationGeneration)
        assert reloaded.total_tokens == 5

    def test_models_are_registered_by_inferred_name(self, conversation_models):
        assert default_model_registry.resolve("Conversation") is conversation_models.Conversation
        assert default_model_registry.resolve("ConversationMessage") is conversation_models.ConversationMessage
        assert default_model_registry.resolve("ConversationGeneration") is conversation_models.ConversationGeneration

    def test_agent_flow(self, database, conversation_models, owner, make_response):
        @has_context("conversation", contextable="user")
        class ChatAgent(HasContext, Agent):
            def chat(self):
                self.prompt(messages=[{"role": "user", "content": self.params["message"]}])

        agent = ChatAgent(
            params={"user": owner, "message": "What is SQLModel?"},
            generator=lambda options: make_response("A Python ORM."),
        )

        agent.process("chat")
        agent.generate_now()
        database.remove_session()

        context = conversation_models.Conversation.find(agent.conversation.id)
        assert context.contextable_type == "Owner"
        assert context.agent_name == "ChatAgent"
        assert [m.to_message_dict() for m in context.messages] == [
            {"role": "user", "content": "What is SQLModel?"},
            {"role": "assistant", "content": "A Python ORM."},
        ]
