"""
Tests for the Language Validator
================================
Fatal rejections, per-pattern drops, soft warnings and immutability of the
validated result.
"""

import copy
import dataclasses
import json
import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namekit.errors import LanguageValidationError
from namekit.languages import LanguageDefinition, Pattern, validate_language


BASE = {
    "id": "testish",
    "name": "Testish",
    "description": "A test language",
    "version": 1.0,
    "syllables": {
        "A": ["kar", "mor", "tal"],
        "B": ["an", "eth", "il"],
        "C": ["ul", "os", "ir"],
    },
    "patterns": {
        "person_names": [
            {"pattern": "A.B", "weight": 60, "description": "Two part", "example": "Karan"},
            {"pattern": "A.C", "weight": 40},
        ],
    },
}


@pytest.fixture
def raw():
    return copy.deepcopy(BASE)


def kinds(issues):
    return [issue.kind for issue in issues]


class TestValidLanguage:
    """A well-formed language validates cleanly."""

    def test_ok(self, raw):
        result = validate_language(raw)
        assert result.ok
        assert result.errors == []
        assert result.warnings == []

    def test_normalized_fields(self, raw):
        language = validate_language(raw).language
        assert isinstance(language, LanguageDefinition)
        assert language.id == "testish"
        assert language.version == "1.0"
        assert language.syllables["A"] == ("kar", "mor", "tal")
        assert language.categories == ("person_names",)
        first = language.get_patterns("person_names")[0]
        assert first == Pattern("A.B", 60.0, "Two part", "Karan")

    def test_declaration_order_kept(self, raw):
        raw["patterns"]["place_names"] = [{"pattern": "C", "weight": 1}]
        raw["patterns"]["clan_names"] = [{"pattern": "B", "weight": 1}]
        language = validate_language(raw).language
        assert language.categories == ("person_names", "place_names", "clan_names")
        assert list(language.syllables) == ["A", "B", "C"]

    def test_result_is_immutable(self, raw):
        language = validate_language(raw).language
        with pytest.raises(TypeError):
            language.syllables["A"] = ("x",)
        with pytest.raises(TypeError):
            language.patterns["new"] = ()
        with pytest.raises(dataclasses.FrozenInstanceError):
            language.name = "Other"
        with pytest.raises(dataclasses.FrozenInstanceError):
            language.get_patterns("person_names")[0].weight = 5

    def test_source_not_aliased(self, raw):
        language = validate_language(raw).language
        raw["syllables"]["A"].append("zzz")
        assert "zzz" not in language.syllables["A"]

    def test_unwrap(self, raw):
        result = validate_language(raw)
        assert result.unwrap() is result.language


class TestFatalIssues:
    """Problems that reject the whole language."""

    @pytest.mark.parametrize("value", [None, "text", 42, ["a", "b"]])
    def test_not_a_mapping(self, value):
        result = validate_language(value)
        assert not result.ok
        assert kinds(result.errors) == ["not_a_mapping"]

    @pytest.mark.parametrize("field_name", ["id", "name", "syllables", "patterns"])
    def test_missing_field(self, raw, field_name):
        del raw[field_name]
        result = validate_language(raw)
        assert not result.ok
        assert "missing_field" in kinds(result.errors)
        assert any(e.path == field_name for e in result.errors)

    def test_wrong_type(self, raw):
        raw["syllables"] = ["kar", "mor"]
        result = validate_language(raw)
        assert not result.ok
        assert kinds(result.errors) == ["wrong_type"]

    @pytest.mark.parametrize("language_id", ["Testish", "test ish", "test_ish", "tëst", ""])
    def test_invalid_id(self, raw, language_id):
        raw["id"] = language_id
        result = validate_language(raw)
        assert not result.ok
        assert "invalid_id" in kinds(result.errors)

    def test_hyphenated_id_allowed(self, raw):
        raw["id"] = "high-elvish-2"
        assert validate_language(raw).ok

    def test_empty_group(self, raw):
        raw["syllables"]["B"] = []
        result = validate_language(raw)
        assert not result.ok
        assert "empty_group" in kinds(result.errors)

    def test_no_groups(self, raw):
        raw["syllables"] = {}
        result = validate_language(raw)
        assert not result.ok
        assert "empty_group" in kinds(result.errors)

    @pytest.mark.parametrize("bad", ["", 7, None, "-"])
    def test_invalid_syllable(self, raw, bad):
        raw["syllables"]["A"] = ["kar", bad, "tal"]
        result = validate_language(raw)
        assert not result.ok
        assert "invalid_syllable" in kinds(result.errors)

    def test_joiner_only_syllable(self, raw):
        raw["syllables"]["J"] = ["-son", "-", "-ward"]
        result = validate_language(raw)
        assert not result.ok
        issue = [e for e in result.errors if e.kind == "invalid_syllable"][0]
        assert issue.path == "syllables.J"

    def test_joined_syllables_accepted(self, raw):
        raw["syllables"]["J"] = ["-son", "-dottir", "-ward"]
        assert validate_language(raw).ok

    def test_no_usable_patterns(self, raw):
        raw["patterns"] = {
            "person_names": [{"pattern": "A.Z", "weight": 1}],
            "place_names": [{"pattern": "A", "weight": 0}],
        }
        result = validate_language(raw)
        assert not result.ok
        assert "no_usable_patterns" in kinds(result.fatal_errors)

    def test_unwrap_raises(self, raw):
        raw["id"] = "Bad Id"
        result = validate_language(raw)
        with pytest.raises(LanguageValidationError) as exc_info:
            result.unwrap()
        assert "invalid_id" in kinds(exc_info.value.issues)
        assert exc_info.value.kind == "validation"


class TestGracefulDegradation:
    """Broken patterns and categories are dropped, not fatal."""

    def test_unknown_group_drops_pattern(self, raw):
        raw["patterns"]["person_names"] = [
            {"pattern": "A.B", "weight": 1},
            {"pattern": "A.C", "weight": 1},
            {"pattern": "B.Q", "weight": 1},
            {"pattern": "C.A", "weight": 1},
            {"pattern": "B.A", "weight": 1},
        ]
        result = validate_language(raw)
        assert result.ok
        templates = [p.template for p in result.language.get_patterns("person_names")]
        assert templates == ["A.B", "A.C", "C.A", "B.A"]
        assert kinds(result.dropped) == ["unknown_group"]
        assert result.dropped[0].path == "patterns.person_names[2]"

    def test_zero_weight_pattern_dropped(self, raw):
        raw["patterns"]["person_names"] = [
            {"pattern": "A.B", "weight": 1},
            {"pattern": "A.C", "weight": 0},
        ]
        result = validate_language(raw)
        assert result.ok
        assert [p.template for p in result.language.get_patterns("person_names")] == ["A.B"]
        assert kinds(result.dropped) == ["invalid_weight"]

    @pytest.mark.parametrize("weight", [-5, float("nan"), float("inf"), "heavy", None, True, 10 ** 400])
    def test_invalid_weights_dropped(self, raw, weight):
        raw["patterns"]["person_names"][1]["weight"] = weight
        result = validate_language(raw)
        assert result.ok
        assert len(result.language.get_patterns("person_names")) == 1
        assert "invalid_weight" in kinds(result.dropped)

    @pytest.mark.parametrize("entry", ["A.B", {"weight": 3}, {"pattern": "  ", "weight": 3}, {"pattern": 5, "weight": 3}])
    def test_malformed_entry_dropped(self, raw, entry):
        raw["patterns"]["person_names"].append(entry)
        result = validate_language(raw)
        assert result.ok
        assert kinds(result.dropped) == ["invalid_pattern"]

    def test_huge_json_weight_dropped(self, raw):
        """A JSON integer too large for a float drops only its pattern."""
        text = json.dumps(raw).replace('"weight": 40', '"weight": 1' + "0" * 400)
        result = validate_language(json.loads(text))
        assert result.ok
        assert [p.template for p in result.language.get_patterns("person_names")] == ["A.B"]
        assert kinds(result.dropped) == ["invalid_weight"]

    def test_empty_token_dropped(self, raw):
        raw["patterns"]["person_names"].append({"pattern": "A..B", "weight": 3})
        result = validate_language(raw)
        assert result.ok
        assert kinds(result.dropped) == ["unknown_group"]

    def test_category_without_patterns_dropped(self, raw):
        raw["patterns"]["place_names"] = [{"pattern": "X.Y", "weight": 2}]
        raw["patterns"]["empty_names"] = []
        result = validate_language(raw)
        assert result.ok
        assert result.language.categories == ("person_names",)
        assert kinds(result.warnings) == ["empty_category", "empty_category"]

    def test_dropped_issues_not_fatal(self, raw):
        raw["patterns"]["person_names"].append({"pattern": "Q", "weight": 1})
        result = validate_language(raw)
        assert result.fatal_errors == []
        assert all(not e.fatal for e in result.errors)


class TestWarnings:
    """Soft issues are reported but do not block loading."""

    def test_sparse_group(self, raw):
        raw["syllables"]["A"] = ["kar", "mor"]
        result = validate_language(raw)
        assert result.ok
        assert kinds(result.warnings) == ["sparse_group"]
        assert result.warnings[0].path == "syllables.A"

    def test_phonotactics_parsed(self, raw):
        raw["phonotactics"] = {"forbidden": ["KK"], "allowed_clusters": ["Th"], "vowel_harmony": True}
        constraints = validate_language(raw).language.phonotactics
        assert constraints.forbidden == ("kk",)
        assert constraints.allowed_clusters == ("th",)
        assert constraints.vowel_harmony is True

    def test_empty_phonotactics_ignored(self, raw):
        raw["phonotactics"] = {"forbidden": [], "vowel_harmony": False}
        result = validate_language(raw)
        assert result.language.phonotactics is None
        assert result.warnings == []

    @pytest.mark.parametrize("value", ["none", {"forbidden": "kk"}, {"vowel_harmony": "yes"}])
    def test_invalid_phonotactics(self, raw, value):
        raw["phonotactics"] = value
        result = validate_language(raw)
        assert result.ok
        assert result.language.phonotactics is None
        assert kinds(result.warnings) == ["invalid_phonotactics"]

    def test_metadata(self, raw):
        raw["metadata"] = {"themes": ["forest"], "difficulty": "beginner", "cultural_note": "Soft"}
        metadata = validate_language(raw).language.metadata
        assert metadata.themes == ("forest",)
        assert metadata.difficulty == "beginner"
        assert metadata.cultural_note == "Soft"

    def test_invalid_metadata(self, raw):
        raw["metadata"] = ["forest"]
        result = validate_language(raw)
        assert result.ok
        assert kinds(result.warnings) == ["invalid_metadata"]
