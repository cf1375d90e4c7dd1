"""Unit tests for the customize.py command line runner."""

import json
from unittest.mock import patch

import pytest
from rich.markdown import Markdown

import customize
from scentlab.catalog import personas
from scentlab.engine.adjustments import recommend_adjustments
from scentlab.engine.pipeline import generate_custom_recipe
from scentlab.models.models import AdjustmentFeedback, Feedback
from scentlab.utils.config import config


@pytest.fixture(autouse=True)
def builtin_catalog(monkeypatch):
    monkeypatch.setattr(personas, "_default_catalog", None)
    monkeypatch.setattr(config, "CATALOG_PATH", None)
    monkeypatch.setattr(config, "OUTPUT_FORMAT", "markdown")


@pytest.fixture
def mock_console():
    with patch("customize.console") as console:
        yield console


def printed_json(console):
    return [call.kwargs["data"] for call in console.print_json.call_args_list]


class TestParsePayload:
    """Test parse_payload."""

    def test_valid_payload(self):
        assert customize.parse_payload('{"perfumeId": "BK-2201"}') == {"perfumeId": "BK-2201"}

    @pytest.mark.parametrize(
        "raw,message",
        [
            ("not json", "valid JSON"),
            ("[1, 2]", "JSON object"),
            ('{"retentionPercentage": 50}', "perfumeId"),
        ],
    )
    def test_invalid_payload(self, raw, message):
        with pytest.raises(ValueError, match=message):
            customize.parse_payload(raw)


class TestRenderMarkdown:
    """Test markdown rendering."""

    def test_recipe_card(self, profile):
        markdown = customize.render_recipe_markdown(generate_custom_recipe(profile, Feedback(retention_percentage=100)))

        assert markdown.startswith("# 테스트 향수")
        assert "| 시더우드 | 0.47g | 47% |" in markdown
        assert "| 시더우드 | 2.35g | 47% |" in markdown
        assert "## 시향 테스트" in markdown
        assert "우디과 머스크" in markdown

    def test_adjustments_card(self, profile):
        result = recommend_adjustments(AdjustmentFeedback(perfume_id="p1", sweetness=5), profile)
        markdown = customize.render_adjustments_markdown(result)

        assert markdown.startswith("# 테스트 향수 (p1)")
        assert "- 기존 향수 베이스:" in markdown
        assert "- 바닐라: 3.0g" in markdown


class TestRunCustomize:
    """Test run_customize."""

    def test_markdown_output(self, mock_console):
        assert customize.run_customize('{"perfumeId": "BK-2201", "retentionPercentage": 60}') == 0

        rendered = mock_console.print.call_args.args[0]
        assert isinstance(rendered, Markdown)
        mock_console.print_json.assert_not_called()

    def test_json_output(self, mock_console):
        assert customize.run_customize('{"perfumeId": "BK-2201"}', as_json=True) == 0

        [record] = printed_json(mock_console)
        assert record["basedOn"] == "블랙베리"
        assert set(record) >= {"recipe10ml", "recipe50ml", "testGuide", "explanation"}

    def test_json_output_from_config(self, mock_console, monkeypatch):
        monkeypatch.setattr(config, "OUTPUT_FORMAT", "json")

        assert customize.run_customize('{"perfumeId": "BK-2201"}') == 0
        assert len(printed_json(mock_console)) == 1

    def test_debug_prints_record_and_card(self, mock_console):
        assert customize.run_customize('{"perfumeId": "BK-2201"}', debug=True) == 0

        assert len(printed_json(mock_console)) == 1
        assert isinstance(mock_console.print.call_args.args[0], Markdown)

    def test_prompt_only(self, mock_console):
        raw = json.dumps({"perfumeId": "BK-2201", "categoryPreferences": {"citrus": "increase"}})
        assert customize.run_customize(raw, prompt_only=True) == 0

        prompt = mock_console.print.call_args.args[0]
        assert "블랙베리 (ID: BK-2201)" in prompt
        assert "- citrus: increase" in prompt

    def test_adjust(self, mock_console):
        raw = '{"perfumeId": "BK-2201", "retentionPercentage": 100, "sweetness": 5}'
        assert customize.run_customize(raw, adjust=True, as_json=True) == 0

        [record] = printed_json(mock_console)
        assert record["perfumeName"] == "블랙베리"
        assert record["adjustments"][1]["noteId"] == "vanilla"

    def test_unknown_perfume(self, mock_console):
        assert customize.run_customize('{"perfumeId": "XX-0000"}') == 1
        assert "XX-0000" in mock_console.print.call_args.args[0]

    def test_invalid_json(self, mock_console):
        assert customize.run_customize("{oops") == 1

    def test_invalid_adjustment_rating(self, mock_console):
        assert customize.run_customize('{"perfumeId": "BK-2201", "sweetness": 9}', adjust=True) == 1

    def test_malformed_feedback_prints_fallback(self, mock_console):
        assert customize.run_customize('{"perfumeId": "BK-2201", "retentionPercentage": 500}', as_json=True) == 0

        [record] = printed_json(mock_console)
        assert record["explanation"]["rationale"] == "오류로 인해 기본 레시피가 제공됩니다."


class TestPrintAvailableScents:
    """Test print_available_scents."""

    def test_prints_table_of_personas(self, mock_console):
        customize.print_available_scents()

        table = mock_console.print.call_args.args[0]
        assert table.row_count == len(personas.BUILTIN_PERSONAS)
