import pytest

from services.errors import MalformedStructuredDataError, NoStructuredDataFoundError
from services.structured_response import extract_json, strip_code_fences


def test_extract_json_ignores_surrounding_prose():
    assert extract_json('noise {"a":1} more noise', mode="object") == {"a": 1}


def test_extract_json_strips_json_fence():
    assert extract_json('```json\n{"a":1}\n```') == {"a": 1}


def test_extract_json_fenced_object_with_commentary():
    text = (
        "Sure! Here is the analysis you asked for:\n"
        "```json\n"
        '{"competitor_name": "Notion", "weaknesses": ["Slow", "Offline mode", "Pricing"]}\n'
        "```\n"
        "Let me know if you need anything else."
    )
    parsed = extract_json(text)
    assert parsed == {"competitor_name": "Notion", "weaknesses": ["Slow", "Offline mode", "Pricing"]}
    assert "json" not in parsed
    assert not any("```" in item for item in parsed["weaknesses"])


def test_extract_json_keeps_nested_objects():
    parsed = extract_json('Result: {"a": {"b": [1, 2]}, "c": "x"} done')
    assert parsed == {"a": {"b": [1, 2]}, "c": "x"}


def test_extract_json_array_mode():
    assert extract_json('Items: ["one", "two"] (end)', mode="array") == ["one", "two"]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "no structured data here",
        "only an opener {",
        "only a closer }",
        "} reversed {",
    ],
)
def test_extract_json_without_bracket_pair_raises_not_found(text):
    with pytest.raises(NoStructuredDataFoundError):
        extract_json(text)


def test_extract_json_array_mode_requires_square_brackets():
    with pytest.raises(NoStructuredDataFoundError):
        extract_json('{"a": 1}', mode="array")


@pytest.mark.parametrize(
    "text",
    [
        '{"a": 1,}',
        '{"a": "unterminated}',
        'first {"a": 1} and second {"b": 2}',
        "{'a': 1}",
    ],
)
def test_extract_json_invalid_span_raises_malformed(text):
    with pytest.raises(MalformedStructuredDataError):
        extract_json(text)


def test_extract_json_rejects_unknown_mode():
    with pytest.raises(ValueError, match="Unsupported parse mode"):
        extract_json("{}", mode="tuple")


def test_strip_code_fences_removes_html_tag_and_markers():
    raw = "Here you go:\n```html\n<div class=\"hero\">Hi</div>\n```"
    assert strip_code_fences(raw) == 'Here you go:\n\n<div class="hero">Hi</div>'


def test_strip_code_fences_without_fence_only_trims():
    assert strip_code_fences("  <p>plain</p>\n") == "<p>plain</p>"


def test_strip_code_fences_keeps_text_after_inline_fence():
    assert strip_code_fences("```{\"a\": 1}```") == '{"a": 1}'
