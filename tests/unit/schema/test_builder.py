import json

import pytest

from toolschema_kit.schema.builder import (
    build_property_schema,
    build_tools_document,
    format_json,
)
from toolschema_kit.schema.config import JSONFormatConfig
from toolschema_kit.schema.models import FunctionDef, ItemsDef, ParameterDef, PropertyDef


@pytest.fixture
def weather_function() -> FunctionDef:
    return FunctionDef(
        name="get_weather",
        description="Get current weather",
        params=[
            ParameterDef(key="city", description="City name", required=True),
            ParameterDef(
                key="unit",
                enum=["celsius", "fahrenheit"],
                default="celsius",
            ),
            ParameterDef(key="days", type="integer", minimum=1, maximum=7),
        ],
    )


class TestBuildPropertySchema:
    def test_type_only(self) -> None:
        assert build_property_schema(ParameterDef(key="q")) == {"type": "string"}

    def test_includes_description(self) -> None:
        schema = build_property_schema(ParameterDef(key="q", description="Query"))

        assert schema == {"type": "string", "description": "Query"}

    def test_enum_on_string(self) -> None:
        schema = build_property_schema(ParameterDef(key="u", enum=["a", "b"]))

        assert schema["enum"] == ["a", "b"]

    def test_empty_enum_is_omitted(self) -> None:
        assert "enum" not in build_property_schema(ParameterDef(key="u", enum=[]))

    def test_enum_not_emitted_for_boolean(self) -> None:
        param = ParameterDef(key="flag", type="boolean", enum=[True])

        assert "enum" not in build_property_schema(param)

    @pytest.mark.parametrize("default", [0, False, None, "x", [1, 2]])
    def test_explicit_defaults_are_kept(self, default: object) -> None:
        schema = build_property_schema(ParameterDef(key="d", default=default))

        assert schema["default"] == default

    def test_empty_string_default_is_omitted(self) -> None:
        assert "default" not in build_property_schema(ParameterDef(key="d", default=""))

    def test_unset_default_is_omitted(self) -> None:
        assert "default" not in build_property_schema(ParameterDef(key="d"))

    def test_numeric_bounds_are_coerced(self) -> None:
        param = ParameterDef(key="n", type="number", minimum="5", maximum="2.5")

        schema = build_property_schema(param)

        assert schema["minimum"] == 5
        assert isinstance(schema["minimum"], int)
        assert schema["maximum"] == 2.5

    @pytest.mark.parametrize(
        "value", ["", "  ", "abc", "nan", "inf", "1_000", "2_5.0"]
    )
    def test_non_numeric_bounds_are_omitted(self, value: str) -> None:
        param = ParameterDef(key="n", type="integer", minimum=value)

        assert "minimum" not in build_property_schema(param)

    def test_zero_bound_is_kept(self) -> None:
        param = ParameterDef(key="n", type="integer", minimum=0)

        assert build_property_schema(param)["minimum"] == 0

    def test_string_constraints(self) -> None:
        param = ParameterDef(
            key="code", pattern="^[A-Z]+$", min_length="2", max_length=8
        )

        schema = build_property_schema(param)

        assert schema == {
            "type": "string",
            "pattern": "^[A-Z]+$",
            "minLength": 2,
            "maxLength": 8,
        }

    def test_stale_fields_from_other_types_are_dropped(self) -> None:
        """Constraints left over from a type change never reach the output."""
        param = ParameterDef(
            key="n",
            type="number",
            pattern="^a",
            min_length=1,
            items=ItemsDef(type="string"),
            min_items=1,
        )

        assert build_property_schema(param) == {"type": "number"}

    def test_bounds_dropped_on_string(self) -> None:
        param = ParameterDef(key="s", minimum=1, maximum=3)

        assert build_property_schema(param) == {"type": "string"}

    def test_array_constraints(self) -> None:
        param = ParameterDef(
            key="tags",
            type="array",
            items=ItemsDef(type="integer"),
            min_items=1,
            max_items="5",
        )

        schema = build_property_schema(param)

        assert schema == {
            "type": "array",
            "items": {"type": "integer"},
            "minItems": 1,
            "maxItems": 5,
        }

    def test_object_properties_and_required(self) -> None:
        param = ParameterDef(
            key="address",
            type="object",
            properties={
                "street": PropertyDef(key="street", required=True),
                "zip": PropertyDef(key="zip", type="integer"),
            },
        )

        schema = build_property_schema(param)

        assert schema == {
            "type": "object",
            "properties": {
                "street": {"type": "string"},
                "zip": {"type": "integer"},
            },
            "required": ["street"],
        }

    def test_object_without_required_omits_list(self) -> None:
        param = ParameterDef(
            key="o", type="object", properties={"a": PropertyDef(key="a")}
        )

        assert "required" not in build_property_schema(param)

    def test_properties_ignored_on_non_object(self) -> None:
        param = ParameterDef(
            key="o", type="string", properties={"a": PropertyDef(key="a")}
        )

        assert build_property_schema(param) == {"type": "string"}

    def test_nesting_stops_at_one_level(self) -> None:
        """Nested entries never emit their own properties."""
        inner = ParameterDef(
            key="inner",
            type="object",
            properties={"deep": PropertyDef(key="deep")},
        )
        outer = ParameterDef(key="outer", type="object", properties={"inner": inner})

        schema = build_property_schema(outer)

        assert schema["properties"]["inner"] == {"type": "object"}

    def test_output_does_not_alias_input(self) -> None:
        param = ParameterDef(key="u", enum=["a"], default={"nested": [1]})

        schema = build_property_schema(param)
        param.enum.append("b")
        param.default["nested"].append(2)

        assert schema["enum"] == ["a"]
        assert schema["default"] == {"nested": [1]}


class TestBuildToolsDocument:
    def test_openai_shape(self, weather_function: FunctionDef) -> None:
        document = build_tools_document([weather_function])

        assert document == [
            {
                "type": "function",
                "function": {
                    "name": "get_weather",
                    "description": "Get current weather",
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "city": {"type": "string", "description": "City name"},
                            "unit": {
                                "type": "string",
                                "enum": ["celsius", "fahrenheit"],
                                "default": "celsius",
                            },
                            "days": {"type": "integer", "minimum": 1, "maximum": 7},
                        },
                        "required": ["city"],
                    },
                },
            }
        ]

    def test_parameter_order_is_preserved(self, weather_function: FunctionDef) -> None:
        document = build_tools_document([weather_function])

        properties = document[0]["function"]["parameters"]["properties"]
        assert list(properties) == ["city", "unit", "days"]

    def test_function_without_params(self) -> None:
        document = build_tools_document([FunctionDef(name="ping")])

        assert document == [{"type": "function", "function": {"name": "ping"}}]

    def test_required_list_fidelity(self) -> None:
        func = FunctionDef(
            name="f",
            params=[
                ParameterDef(key="a", required=True),
                ParameterDef(key="b", required=False),
            ],
        )

        parameters = build_tools_document([func])[0]["function"]["parameters"]

        assert parameters["required"] == ["a"]

    def test_no_required_list_when_nothing_required(self) -> None:
        func = FunctionDef(name="f", params=[ParameterDef(key="a")])

        parameters = build_tools_document([func])[0]["function"]["parameters"]

        assert "required" not in parameters

    def test_function_order_is_preserved(self) -> None:
        functions = [FunctionDef(name="b"), FunctionDef(name="a")]

        document = build_tools_document(functions)

        assert [tool["function"]["name"] for tool in document] == ["b", "a"]

    def test_empty_functions_list(self) -> None:
        assert build_tools_document([]) == []

    def test_output_is_serializable(self, weather_function: FunctionDef) -> None:
        json.dumps(build_tools_document([weather_function]))


class TestFormatJson:
    def test_default_indent(self) -> None:
        document = [{"type": "function", "function": {"name": "ping"}}]

        assert format_json(document) == json.dumps(document, indent=2)

    def test_keeps_non_ascii(self) -> None:
        document = [{"type": "function", "function": {"name": "f", "description": "café"}}]

        assert "café" in format_json(document)

    def test_custom_config(self) -> None:
        config = JSONFormatConfig(indent=None, ensure_ascii=True)

        text = format_json([{"description": "café"}], config)

        assert text == '[{"description": "caf\\u00e9"}]'

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_are_rejected(self, value: float) -> None:
        document = [{"type": "function", "function": {"name": "f", "default": value}}]

        with pytest.raises(ValueError):
            format_json(document)
