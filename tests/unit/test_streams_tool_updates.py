# tests/unit/test_streams_tool_updates.py
"""Unit tests for StreamsToolUpdates."""

from datetime import datetime

import pytest

from solid_agent.agent import Agent
from solid_agent.concerns.streams_tool_updates import StreamsToolUpdates, tool_description
from solid_agent.config.settings import get_settings
from solid_agent.infrastructure.broadcast import InMemoryBroadcaster


@pytest.fixture
def agent_class():
    class ResearchAgent(StreamsToolUpdates, Agent):
        def navigate(self, url=None):
            return {"success": True, "url": url}

        def extract_text(self, selector="body"):
            return {"text": f"text of {selector}"}

        def search(self, query=None):
            return [query]

        def lookup_order(self, order_id=None):
            return {"order_id": order_id}

    return ResearchAgent


@pytest.mark.unit
class TestBroadcasting:

    def test_no_stream_id_publishes_nothing(self, agent_class, broadcaster):
        agent_class.declare_tool_description("navigate", "Navigating...")
        agent = agent_class(broadcaster=broadcaster)

        agent.navigate(url="https://example.com")

        assert broadcaster.broadcasts == []

    def test_callable_description_receives_arguments(self, agent_class, broadcaster):
        agent_class.declare_tool_description("navigate", lambda args: f"Visiting {args.get('url') or 'page'}...")
        agent = agent_class(params={"stream_id": "s1"}, broadcaster=broadcaster)

        agent.navigate(url="https://example.com")

        assert len(broadcaster.broadcasts) == 1
        published = broadcaster.broadcasts[0]
        assert published["channel"] == "s1"
        assert published["data"]["tool_status"]["name"] == "navigate"
        assert published["data"]["tool_status"]["description"] == "Visiting https://example.com..."

    def test_static_description(self, agent_class, broadcaster):
        agent_class.declare_tool_description("extract_text", "Reading page content...")
        agent = agent_class(params={"stream_id": "s1"}, broadcaster=broadcaster)

        agent.extract_text(selector="main")

        assert broadcaster.for_channel("s1")[0]["tool_status"]["description"] == "Reading page content..."

    def test_non_string_description_falls_back_to_defaults(self, agent_class, broadcaster):
        agent_class.declare_tool_description("search", None)
        agent = agent_class(params={"stream_id": "s1"}, broadcaster=broadcaster)

        agent.search(query="python")

        assert broadcaster.for_channel("s1")[0]["tool_status"]["description"] == "Searching for 'python'..."

    def test_tool_result_is_unchanged(self, agent_class, broadcaster):
        agent_class.declare_tool_description("navigate", "Navigating...")
        agent = agent_class(params={"stream_id": "s1"}, broadcaster=broadcaster)

        assert agent.navigate(url="https://example.com") == {"success": True, "url": "https://example.com"}

    def test_timestamp_is_iso8601(self, agent_class, broadcaster):
        agent_class.declare_tool_description("navigate", "Navigating...")
        agent = agent_class(params={"stream_id": "s1"}, broadcaster=broadcaster)

        agent.navigate(url="https://example.com")

        timestamp = broadcaster.for_channel("s1")[0]["tool_status"]["timestamp"]
        assert isinstance(timestamp, str)
        assert datetime.fromisoformat(timestamp.replace("Z", "+00:00")).tzinfo is not None

    def test_undescribed_tools_are_not_wrapped(self, agent_class, broadcaster):
        agent_class.declare_tool_description("navigate", "Navigating...")
        agent = agent_class(params={"stream_id": "s1"}, broadcaster=broadcaster)

        agent.lookup_order(order_id="A-1")

        assert broadcaster.broadcasts == []

    def test_positional_arguments_are_not_passed_to_description(self, agent_class, broadcaster):
        received = []
        agent_class.declare_tool_description("navigate", lambda args: received.append(args) or "Navigating...")
        agent = agent_class(params={"stream_id": "s1"}, broadcaster=broadcaster)

        result = agent.navigate("https://example.com")

        assert received == [{}]
        assert result["url"] == "https://example.com"

    def test_default_process_broadcaster_is_used(self, agent_class):
        agent_class.declare_tool_description("navigate", "Navigating...")
        agent = agent_class(params={"stream_id": "s1"})

        agent.navigate(url="https://example.com")

        assert isinstance(agent.broadcaster, InMemoryBroadcaster)
        assert len(agent.broadcaster.for_channel("s1")) == 1


@pytest.mark.unit
class TestDeclaration:

    def test_redeclaring_does_not_double_wrap(self, agent_class, broadcaster):
        agent_class.declare_tool_description("navigate", "first")
        agent_class.declare_tool_description("navigate", "second")
        agent = agent_class(params={"stream_id": "s1"}, broadcaster=broadcaster)

        agent.navigate(url="https://example.com")

        payloads = broadcaster.for_channel("s1")
        assert len(payloads) == 1
        assert payloads[0]["tool_status"]["description"] == "second"

    def test_missing_method_raises(self, agent_class):
        with pytest.raises(AttributeError):
            agent_class.declare_tool_description("missing_tool", "Missing...")

    def test_wrapper_keeps_method_metadata(self, agent_class):
        agent_class.declare_tool_description("navigate", "Navigating...")

        assert agent_class.navigate.__name__ == "navigate"

    def test_subclass_description_does_not_leak(self, agent_class, broadcaster):
        agent_class.declare_tool_description("navigate", "parent")

        class DeepResearchAgent(agent_class):
            pass

        DeepResearchAgent.declare_tool_description("navigate", "child")

        assert agent_class(broadcaster=broadcaster).tool_description_for("navigate") == "parent"
        assert DeepResearchAgent(broadcaster=broadcaster).tool_description_for("navigate") == "child"

    def test_decorator_form(self, broadcaster):
        @tool_description("extract_text", "Reading page content...")
        @tool_description("navigate", lambda args: f"Visiting {args.get('url') or 'page'}...")
        class BrowserAgent(StreamsToolUpdates, Agent):
            def navigate(self, url=None):
                return url

            def extract_text(self, selector="body"):
                return selector

        agent = BrowserAgent(params={"stream_id": "s2"}, broadcaster=broadcaster)
        agent.navigate()
        agent.extract_text()

        descriptions = [p["tool_status"]["description"] for p in broadcaster.for_channel("s2")]
        assert descriptions == ["Visiting page...", "Reading page content..."]


@pytest.mark.unit
class TestDescriptionLookup:

    def test_unconfigured_known_tool_uses_default(self, agent_class):
        agent = agent_class()

        assert agent.tool_description_for("click", {"text": "OK"}) == "Clicking 'OK'..."

    def test_unconfigured_unknown_tool(self, agent_class):
        assert agent_class().tool_description_for("lookup_order") == "Performing lookup order..."

    def test_url_max_length_comes_from_settings(self, agent_class, monkeypatch):
        monkeypatch.setenv("SOLID_AGENT_TOOL_STATUS_URL_MAX_LENGTH", "12")
        get_settings.cache_clear()

        description = agent_class().tool_description_for("navigate", {"url": "https://example.com/path"})

        assert description == "Visiting example.com..."

    def test_broadcast_returns_status(self, agent_class, broadcaster):
        agent = agent_class(broadcaster=broadcaster)

        assert agent.broadcast_tool_status("search", {"query": "x"}) == "Searching for 'x'..."
        assert broadcaster.broadcasts == []
