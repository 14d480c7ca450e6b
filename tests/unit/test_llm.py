"""Unit tests for the model fallback chain and JSON reply parsing."""

import pytest

from shared.llm import (
    AllModelsFailedError,
    LLMNotConfiguredError,
    parse_json_object,
    strip_code_fences,
)


@pytest.mark.unit
def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


@pytest.mark.unit
def test_parse_json_object_finds_object_in_prose():
    text = 'Here is your advice:\n{"advice": "Learn Rust", "n": 2}\nGood luck!'

    assert parse_json_object(text) == {"advice": "Learn Rust", "n": 2}


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "no json here", "[1, 2, 3]", "{broken"])
def test_parse_json_object_rejects_non_objects(text):
    with pytest.raises(ValueError):
        parse_json_object(text)


@pytest.mark.unit
async def test_complete_stops_at_first_success(scripted_llm):
    llm = scripted_llm({"model-a": None, "model-b": "ok", "model-c": "unused"})

    completion = await llm.complete("prompt", system="system")

    assert completion.text == "ok"
    assert completion.model == "model-b"
    assert [a.model for a in completion.attempts] == ["model-a", "model-b"]
    assert not completion.attempts[0].success
    assert llm.calls == ["model-a", "model-b"]


@pytest.mark.unit
async def test_complete_raises_with_attempt_history(scripted_llm):
    llm = scripted_llm({"model-a": None, "model-b": None})

    with pytest.raises(AllModelsFailedError) as exc_info:
        await llm.complete("prompt")

    error = exc_info.value
    assert [a.model for a in error.attempts] == ["model-a", "model-b"]
    assert "Tried: model-a, model-b" in error.message
    assert "model-b is unavailable" in error.message
    assert error.status_code == 500


@pytest.mark.unit
async def test_complete_requires_api_key(scripted_llm):
    llm = scripted_llm({"model-a": "ok"}, configured=False)

    with pytest.raises(LLMNotConfiguredError, match="not configured"):
        await llm.complete("prompt")
    assert llm.calls == []
