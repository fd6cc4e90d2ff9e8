"""
Tests for the shared Gemini helpers
"""
from unittest.mock import MagicMock

import pytest

from ai_utils import AnalysisError, configure_gemini, generate_structured, strip_markdown_fences
from conftest import gemini_response

SCHEMA = {"type": "object", "properties": {"ok": {"type": "boolean"}}}


@pytest.mark.parametrize("raw, expected", [
    ('```json\n{"ok": true}\n```', '{"ok": true}'),
    ('```\n{"ok": true}\n```', '{"ok": true}'),
    ('  {"ok": true}  ', '{"ok": true}'),
    ('', ''),
    (None, ''),
])
def test_strip_markdown_fences(raw, expected):
    assert strip_markdown_fences(raw) == expected


def test_configure_requires_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(AnalysisError):
        configure_gemini()


def test_fenced_json_is_parsed(gemini):
    gemini.generate_content.side_effect = [gemini_response('```json\n{"ok": true}\n```')]

    assert generate_structured("prompt", SCHEMA) == {"ok": True}
    kwargs = gemini.generate_content.call_args.kwargs
    assert kwargs["generation_config"].response_mime_type == "application/json"


def test_broken_json_is_repaired_once(gemini):
    gemini.generate_content.side_effect = [
        gemini_response('{"ok": tru'),
        gemini_response('{"ok": true}'),
    ]

    assert generate_structured("prompt", SCHEMA) == {"ok": True}
    assert gemini.generate_content.call_count == 2


def test_unrepairable_json_raises(gemini):
    gemini.generate_content.side_effect = [gemini_response("not json"), gemini_response("still not json")]

    with pytest.raises(AnalysisError):
        generate_structured("prompt", SCHEMA)


def test_transport_error_becomes_analysis_error(gemini):
    gemini.generate_content.side_effect = RuntimeError("deadline exceeded")

    with pytest.raises(AnalysisError):
        generate_structured("prompt", SCHEMA)


def test_blocked_prompt_raises(gemini):
    gemini.generate_content.side_effect = [MagicMock(text="{}", prompt_feedback=MagicMock(block_reason="SAFETY"))]

    with pytest.raises(AnalysisError, match="blocked"):
        generate_structured("prompt", SCHEMA)


def test_empty_response_raises(gemini):
    gemini.generate_content.side_effect = [gemini_response("")]

    with pytest.raises(AnalysisError):
        generate_structured("prompt", SCHEMA)
