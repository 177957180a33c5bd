# tests/unit/test_tool_builder.py
"""Unit tests for ToolBuilder."""

import pytest

from solid_agent.tools.builder import ToolBuilder, json_schema_type


@pytest.mark.unit
class TestJsonSchemaType:

    @pytest.mark.parametrize(
        "value,expected",
        [
            (str, "string"),
            (int, "integer"),
            (float, "number"),
            (bool, "boolean"),
            (dict, "object"),
            (list, "array"),
            ("array", "array"),
            ("integer", "integer"),
        ],
    )
    def test_mapping(self, value, expected):
        assert json_schema_type(value) == expected

    def test_unknown_class_is_object(self):
        class Point:
            pass

        assert json_schema_type(Point) == "object"


@pytest.mark.unit
class TestToolBuilder:

    def test_empty_tool(self):
        assert ToolBuilder("ping").to_schema() == {
            "type": "function",
            "name": "ping",
            "description": "",
            "parameters": {"type": "object", "properties": {}, "required": []},
        }

    def test_parameters_keep_declaration_order(self):
        builder = (
            ToolBuilder("navigate")
            .description("Navigate to a URL")
            .parameter("url", required=True, description="URL to visit")
            .parameter("timeout", type="integer", default=30)
            .parameter("wait_until", enum=["load", "networkidle"])
        )

        schema = builder.to_schema()

        assert list(schema["parameters"]["properties"]) == ["url", "timeout", "wait_until"]
        assert schema["parameters"]["properties"] == {
            "url": {"type": "string", "description": "URL to visit"},
            "timeout": {"type": "integer", "default": 30},
            "wait_until": {"type": "string", "enum": ["load", "networkidle"]},
        }
        assert schema["parameters"]["required"] == ["url"]

    def test_only_set_extras_are_emitted(self):
        schema = ToolBuilder("fill_form").parameter("field").to_schema()

        assert schema["parameters"]["properties"]["field"] == {"type": "string"}

    def test_falsy_default_is_kept(self):
        schema = ToolBuilder("search").parameter("safe", type=bool, default=False).to_schema()

        assert schema["parameters"]["properties"]["safe"] == {"type": "boolean", "default": False}

    def test_array_items(self):
        schema = ToolBuilder("tag").parameter("tags", type=list, items={"type": "string"}).to_schema()

        assert schema["parameters"]["properties"]["tags"] == {"type": "array", "items": {"type": "string"}}

    def test_required_names_are_not_duplicated(self):
        builder = ToolBuilder("search").parameter("query", required=True).parameter("query", required=True)

        assert builder.to_schema()["parameters"]["required"] == ["query"]

    def test_context_manager_completes_on_clean_exit(self):
        completed = []

        with ToolBuilder("search", on_complete=completed.append) as t:
            t.description("Search")

        assert completed == [t]

    def test_context_manager_skips_completion_on_error(self):
        completed = []

        with pytest.raises(ValueError):
            with ToolBuilder("search", on_complete=completed.append):
                raise ValueError("bad parameter")

        assert completed == []

    def test_register_completes_and_chains(self):
        completed = []
        builder = ToolBuilder("ping", on_complete=completed.append)

        assert builder.description("Check the service").register() is builder
        assert completed == [builder]

    def test_register_without_owner_is_a_no_op(self):
        builder = ToolBuilder("ping")

        assert builder.register() is builder
