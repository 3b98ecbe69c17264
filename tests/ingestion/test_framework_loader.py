"""Tests for framework and answer loading.

Covers: nested and flat layouts, field mapping, deterministic ids,
orphan handling, answer records, and load errors.
"""

import json
import logging

import pytest

from src.ingestion.framework_loader import (
    FrameworkLoadError,
    load_answers,
    load_framework,
    parse_answers,
    parse_framework,
)
from src.models.common import ItemKind, Track
from src.scoring.engine import compute_results


# ===================================================================
# Nested layout
# ===================================================================


class TestNestedLayout:
    def test_hierarchy(self, nested_framework_data) -> None:
        framework = parse_framework(nested_framework_data)
        assert len(framework) == 1
        category = framework[0]
        assert category.name == "Security"
        assert category.icon == "shield"
        assert [g.code for g in category.groups] == ["AC"]
        assert [i.code for i in category.groups[0].items] == ["MFA", "REV"]

    def test_ids_from_code_path(self, nested_framework_data) -> None:
        category = parse_framework(nested_framework_data)[0]
        group = category.groups[0]
        assert category.id == "SEC"
        assert group.id == "SEC/AC"
        assert [i.id for i in group.items] == ["SEC/AC/MFA", "SEC/AC/REV"]

    def test_ids_are_stable(self, nested_framework_data) -> None:
        assert parse_framework(nested_framework_data) == parse_framework(
            nested_framework_data
        )

    def test_explicit_ids_kept(self, nested_framework_data) -> None:
        nested_framework_data[0]["mechanisms"][0]["metrics"][0]["id"] = "metric-42"
        item = parse_framework(nested_framework_data)[0].groups[0].items[0]
        assert item.id == "metric-42"

    def test_item_fields(self, nested_framework_data) -> None:
        mfa, rev = parse_framework(nested_framework_data)[0].groups[0].items
        assert mfa.track == Track.OPERATIONAL
        assert mfa.kind == ItemKind.BOOLEAN
        assert mfa.weight == 2.0
        assert mfa.group_cap == 80.0
        assert mfa.category_cap == 90.0
        assert mfa.standards == ["ISO 27001", "SOC 2"]
        assert mfa.percentage_choices == [0.0, 100.0]

        assert rev.track == Track.DESIGN
        assert rev.kind == ItemKind.PERCENTAGE
        assert rev.weight == 1.0
        assert rev.group_cap is None
        assert rev.standards == ["NIST CSF"]
        assert rev.percentage_choices == []

    def test_zero_cap_loaded_as_written(self, nested_framework_data) -> None:
        nested_framework_data[0]["mechanisms"][0]["metrics"][0]["mechanismCap"] = 0
        item = parse_framework(nested_framework_data)[0].groups[0].items[0]
        assert item.group_cap == 0.0

    def test_group_fields(self, nested_framework_data) -> None:
        group = parse_framework(nested_framework_data)[0].groups[0]
        assert group.operational_weight == 2.0
        assert group.design_weight == 1.0
        assert [p.label for p in group.operational_configurations] == ["None", "Hardened"]
        assert group.operational_configurations[1].description == "All controls on"
        assert group.design_configurations == []

    def test_loaded_framework_scores(self, nested_framework_data) -> None:
        framework = parse_framework(nested_framework_data)
        answers = parse_answers({"SEC/AC/REV": {"answered_percentage": 70}})
        result = compute_results(framework, answers)
        assert result.overall_design_score == pytest.approx(70.0)
        assert result.overall_operational_score == 0.0

    def test_invalid_item_raises(self, nested_framework_data) -> None:
        nested_framework_data[0]["mechanisms"][0]["metrics"][0]["type"] = "sideways"
        with pytest.raises(FrameworkLoadError, match="Invalid framework definition"):
            parse_framework(nested_framework_data)

    def test_logs_summary(self, nested_framework_data, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="src.ingestion.framework_loader"):
            parse_framework(nested_framework_data)
        assert "Loaded framework: 1 pillars, 1 mechanisms, 2 metrics" in caplog.text


# ===================================================================
# Flat layout
# ===================================================================


class TestFlatLayout:
    def test_hierarchy(self, flat_framework_data) -> None:
        framework = parse_framework(flat_framework_data)
        assert [c.code for c in framework] == ["SEC", "PRV"]
        assert [g.id for g in framework[0].groups] == ["SEC/AC"]
        assert [i.id for i in framework[1].groups[0].items] == ["PRV/MIN/INV"]

    def test_orphans_skipped_with_warning(self, flat_framework_data, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="src.ingestion.framework_loader"):
            framework = parse_framework(flat_framework_data)

        codes = [g.code for c in framework for g in c.groups]
        assert "GHOST" not in codes
        assert "Mechanism GHOST references unknown pillar: NOPE" in caplog.text
        assert "Metric LOST references unknown mechanism: GHOST" in caplog.text
        assert "Skipped 1 orphaned metrics" in caplog.text

    def test_default_track_and_kind(self, flat_framework_data) -> None:
        item = parse_framework(flat_framework_data)[0].groups[0].items[0]
        assert item.track == Track.OPERATIONAL
        assert item.kind == ItemKind.BOOLEAN


class TestFrameworkErrors:
    def test_unknown_shape(self) -> None:
        with pytest.raises(FrameworkLoadError):
            parse_framework({"categories": []})

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FrameworkLoadError, match="Cannot read"):
            load_framework(tmp_path / "missing.json")

    def test_bad_json(self, tmp_path) -> None:
        path = tmp_path / "framework.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(FrameworkLoadError):
            load_framework(path)

    def test_load_from_file(self, tmp_path, nested_framework_data) -> None:
        path = tmp_path / "framework.json"
        path.write_text(json.dumps(nested_framework_data), encoding="utf-8")
        assert load_framework(path) == parse_framework(nested_framework_data)


# ===================================================================
# Answers
# ===================================================================


class TestParseAnswers:
    def test_records(self) -> None:
        answers = parse_answers([
            {"metricId": "a", "answer": True},
            {"metricId": "b", "answer": False, "answerValue": "55"},
        ])
        assert answers["a"].answered_boolean is True
        assert answers["a"].answered_percentage is None
        assert answers["b"].answered_percentage == 55.0

    def test_record_without_id_skipped(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="src.ingestion.framework_loader"):
            answers = parse_answers([{"answer": True}, {"metricId": "a"}])
        assert list(answers) == ["a"]
        assert "Skipping response without a metric id" in caplog.text

    def test_mapping(self) -> None:
        answers = parse_answers({"a": {"answered_boolean": True}, "b": {"answerValue": 10}})
        assert answers["a"].answered_boolean is True
        assert answers["b"].answered_percentage == 10.0

    def test_out_of_range_value_kept(self) -> None:
        answers = parse_answers({"a": {"answerValue": 140}})
        assert answers["a"].answered_percentage == 140.0

    @pytest.mark.parametrize("data", ["nope", [1], {"a": 5}])
    def test_invalid(self, data) -> None:
        with pytest.raises(FrameworkLoadError):
            parse_answers(data)

    def test_load_from_file(self, tmp_path) -> None:
        path = tmp_path / "answers.json"
        path.write_text(json.dumps([{"metricId": "x", "answer": True}]), encoding="utf-8")
        assert load_answers(path)["x"].answered_boolean is True
