# tests/integration/test_context_models.py
"""
Integration tests for the SQLModel context tables.

Run against in-memory SQLite through the ``database`` fixture.
"""

import pytest
from structlog.testing import capture_logs

from solid_agent.config.settings import get_settings
from solid_agent.domain.exceptions import RecordNotFound
from solid_agent.infrastructure.database import (
    AgentContext,
    AgentGeneration,
    AgentMessage,
    ContextableRef,
    DatabaseManager,
)
from solid_agent.interfaces.generation import GenerationMessage, GenerationResponse, GenerationUsage
from tests.factories.fixtures import Owner


@pytest.mark.integration
class TestAgentContext:

    def test_create_and_find(self, database, owner):
        context = AgentContext.create(
            contextable=owner,
            agent_name="WritingAssistantAgent",
            action_name="improve",
            options={"input_params": {"task": "improve"}},
        )
        database.remove_session()

        found = AgentContext.find(str(context.id))

        assert found.id == context.id
        assert found.contextable == ContextableRef("Owner", "42")
        assert found.input_params == {"task": "improve"}

    def test_find_unknown_raises(self, database):
        with pytest.raises(RecordNotFound):
            AgentContext.find("00000000-0000-0000-0000-000000000000")

        with pytest.raises(RecordNotFound):
            AgentContext.find("not-a-uuid")

    def test_anonymous_context(self, database):
        context = AgentContext.create(contextable=None, agent_name="ChatAgent")

        assert context.contextable is None
        assert context.contextable_type is None
        assert context.input_params is None

    def test_find_or_create_by_is_idempotent(self, database, owner):
        populated = []

        first = AgentContext.find_or_create_by(
            on_create=populated.append,
            contextable=owner,
            agent_name="ChatAgent",
            action_name="chat",
        )
        second = AgentContext.find_or_create_by(
            on_create=populated.append,
            contextable=owner,
            agent_name="ChatAgent",
            action_name="chat",
        )

        assert first.id == second.id
        assert populated == [first]

    def test_find_or_create_by_scopes_by_owner_agent_and_action(self, database, owner):
        base = AgentContext.find_or_create_by(contextable=owner, agent_name="ChatAgent", action_name="chat")

        other_owner = AgentContext.find_or_create_by(contextable=Owner(7), agent_name="ChatAgent", action_name="chat")
        other_action = AgentContext.find_or_create_by(contextable=owner, agent_name="ChatAgent", action_name="review")
        no_action = AgentContext.find_or_create_by(contextable=owner, agent_name="ChatAgent", action_name=None)

        assert len({base.id, other_owner.id, other_action.id, no_action.id}) == 4

    def test_timestamps_are_timezone_aware(self, database):
        context = AgentContext.create(agent_name="ChatAgent")
        message = context.add_message("user", "Hi")
        generation = context.record_generation({"message": {"content": "Hello!"}})

        for record in (context, message, generation):
            assert record.created_at.tzinfo is not None
            assert record.updated_at.tzinfo is not None

    def test_contextable_without_id_raises(self, database):
        with pytest.raises(TypeError):
            AgentContext.create(contextable=object(), agent_name="ChatAgent")


@pytest.mark.integration
class TestMessages:

    def test_messages_are_ordered_by_position(self, database):
        context = AgentContext.create(agent_name="ChatAgent")

        context.add_message("user", "Hi")
        context.add_message("assistant", "Hello!")
        context.add_message("user", "How are you?")
        database.remove_session()

        reloaded = AgentContext.find(context.id)

        assert [m.position for m in reloaded.messages] == [0, 1, 2]
        assert [m.to_message_dict() for m in reloaded.messages] == [
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello!"},
            {"role": "user", "content": "How are you?"},
        ]

    def test_extra_attributes(self, database):
        context = AgentContext.create(agent_name="ChatAgent")

        message = context.add_message("tool", "42", tool_call_id="call-1", source="calculator")

        assert message.tool_call_id == "call-1"
        assert message.extra == {"source": "calculator"}

    def test_position_and_role_come_from_the_context(self, database):
        context = AgentContext.create(agent_name="ChatAgent")
        context.add_message("user", "Hi")

        message = context.add_message("assistant", "Hello!", position=0, role="system", content="ignored")

        assert message.position == 1
        assert message.role == "assistant"
        assert message.content == "Hello!"
        assert message.extra == {}

    def test_unknown_role_raises(self, database):
        context = AgentContext.create(agent_name="ChatAgent")

        with pytest.raises(ValueError):
            context.add_message("narrator", "Once upon a time")

        assert context.messages == []

    def test_build_is_unsaved(self):
        message = AgentMessage.build("user", "Hi", position=3)

        assert message.role == "user"
        assert message.position == 3
        assert message.context_id is None


@pytest.mark.integration
class TestGenerations:

    def test_record_generation(self, database):
        context = AgentContext.create(agent_name="ChatAgent")
        response = GenerationResponse(
            message=GenerationMessage(content="Improved text"),
            model="test-model",
            usage=GenerationUsage(input_tokens=12, output_tokens=30),
            finish_reason="stop",
            raw_response={"id": "resp-1"},
        )

        generation = context.record_generation(response)
        database.remove_session()
        reloaded = AgentContext.find(context.id)

        assert reloaded.generations[0].id == generation.id
        assert reloaded.generations[0].raw_response == {"id": "resp-1"}
        assert reloaded.generations[0].total_tokens == 42
        assert reloaded.messages[-1].to_message_dict() == {"role": "assistant", "content": "Improved text"}
        assert reloaded.total_tokens == 42

    def test_tokens_accumulate(self, database):
        context = AgentContext.create(agent_name="ChatAgent")

        context.record_generation({"message": {"content": "one"}, "usage": {"input_tokens": 1, "output_tokens": 2}})
        context.record_generation({"message": {"content": "two"}, "usage": {"prompt_tokens": 3, "completion_tokens": 4}})

        assert context.total_input_tokens == 4
        assert context.total_output_tokens == 6
        assert [m.content for m in context.messages] == ["one", "two"]

    def test_from_response_without_usage(self):
        generation = AgentGeneration.from_response({"message": {"content": "Hi"}})

        assert generation.content == "Hi"
        assert generation.input_tokens == 0
        assert generation.output_tokens == 0
        assert generation.raw_response == {}


@pytest.mark.integration
class TestDatabaseManager:

    def test_connect_from_settings(self, monkeypatch):
        monkeypatch.setenv("SOLID_AGENT_DATABASE_URL", "sqlite://")
        get_settings.cache_clear()
        manager = DatabaseManager()

        manager.connect_from_settings()
        try:
            assert manager.is_connected
            assert manager.engine.dialect.name == "sqlite"
            assert manager.health_check() is True
        finally:
            manager.disconnect()

        assert manager.is_connected is False

    def test_connect_from_settings_without_url(self):
        with pytest.raises(RuntimeError):
            DatabaseManager().connect_from_settings()

    def test_health_check_reports_unreachable_database(self, tmp_path):
        manager = DatabaseManager()
        manager.connect(f"sqlite:///{tmp_path / 'missing' / 'agents.db'}")

        try:
            with capture_logs() as logs:
                healthy = manager.health_check()
        finally:
            manager.disconnect()

        assert healthy is False
        assert [log["event"] for log in logs] == ["database_health_check_failed"]
