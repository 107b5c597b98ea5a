"""Unit tests for the Astro_AI tool."""

import pytest
from langchain_core.messages import ToolMessage
from pydantic import ValidationError

from astro_ai.tools import ALL_TOOLS
from astro_ai.tools.astro import AstroToolInput, astro_ai, format_user_info

EXPECTED_BLOCK = (
    "User Info:\n"
    "- Name: Asha Rao\n"
    "- Date of Birth: 1992-08-14\n"
    "- Time of Birth: 06:45\n"
    "- Place of Birth: Pune, India\n"
    "- Gender: female\n"
    "- Palm Image 1: https://drive.google.com/uc?id=file-1\n"
    "- Palm Image 2: https://drive.google.com/uc?id=file-2"
)


def test_registry_holds_astro_tool():
    assert ALL_TOOLS == [astro_ai]


def test_tool_metadata():
    assert astro_ai.name == "Astro_AI"
    assert astro_ai.description == "Astrology prediction system."
    assert astro_ai.args_schema is AstroToolInput
    assert set(AstroToolInput.model_fields) == {
        "name", "dob", "tob", "pob", "gender", "palmLeft", "palmRight",
    }


def test_every_field_is_required_and_described():
    for field in AstroToolInput.model_fields.values():
        assert field.is_required()
        assert field.description


@pytest.mark.asyncio
async def test_renders_labeled_block(astro_args):
    result = await astro_ai.ainvoke(astro_args)
    assert result == EXPECTED_BLOCK


def test_values_appear_verbatim_in_field_order(astro_args):
    text = format_user_info(**astro_args)
    positions = [text.index(astro_args[k]) for k in (
        "name", "dob", "tob", "pob", "gender", "palmLeft", "palmRight",
    )]
    assert positions == sorted(positions)


def test_output_is_deterministic(astro_args):
    assert astro_ai.invoke(astro_args) == astro_ai.invoke(dict(astro_args))


def test_values_with_special_characters_pass_through(astro_args):
    astro_args["name"] = "Zoë O'Brien: \"Z\""
    result = astro_ai.invoke(astro_args)
    assert "- Name: Zoë O'Brien: \"Z\"" in result


def test_missing_field_fails_validation(astro_args):
    del astro_args["tob"]
    with pytest.raises(ValidationError):
        astro_ai.invoke(astro_args)


def test_non_string_field_is_not_coerced(astro_args):
    astro_args["dob"] = 19920814
    with pytest.raises(ValidationError):
        astro_ai.invoke(astro_args)


@pytest.mark.asyncio
async def test_tool_call_input_returns_tool_message(astro_args):
    result = await astro_ai.ainvoke({
        "name": "Astro_AI",
        "args": astro_args,
        "id": "call-1",
        "type": "tool_call",
    })
    assert isinstance(result, ToolMessage)
    assert result.tool_call_id == "call-1"
    assert result.content == EXPECTED_BLOCK
