"""Tests for default ATS mappings, URL matching and YAML overrides."""

import pytest

from circus_copier.mappings import (
    default_ats_mappings,
    find_mapping,
    load_mappings_file,
    validate_mappings,
)
from circus_copier.models import ATSMapping, FieldMapping, InputType


class TestDefaultMappings:
    def test_three_ats_in_order(self):
        assert [m.ats_name for m in default_ats_mappings()] == ["sonarATS", "talentio", "HRMOS"]

    def test_sonar_gender_is_translated_select(self):
        sonar = default_ats_mappings()[0]
        gender = [fm for fm in sonar.field_mappings if fm.source_field == "gender"][0]
        assert gender.input_type == InputType.SELECT
        assert gender.value_mapping == {"男性": "male", "女性": "female"}

    def test_talentio_gets_salary_summary(self):
        talentio = default_ats_mappings()[1]
        fields = {fm.source_field: fm for fm in talentio.field_mappings}
        assert fields["salaryInfo"].input_type == InputType.TEXTAREA

    def test_every_default_source_field_exists(self):
        assert validate_mappings(default_ats_mappings()) == []

    def test_fresh_list_each_call(self):
        first = default_ats_mappings()
        first[0].field_mappings.clear()
        assert default_ats_mappings()[0].field_mappings


class TestFindMapping:
    @pytest.mark.parametrize("url, expected", [
        ("https://manager.snar.jp/jobs/1/candidates/new", "sonarATS"),
        ("https://agent.talentio.com/r/1/c/2", "talentio"),
        ("https://hrmos.co/agent/corporates/x/candidates/new", "HRMOS"),
        ("https://circus-job.com/selections/1", None),
    ])
    def test_default_patterns(self, url, expected):
        mapping = find_mapping(default_ats_mappings(), url)
        assert (mapping.ats_name if mapping else None) == expected

    def test_first_match_wins(self):
        mappings = [
            ATSMapping("broad", r"example\.com"),
            ATSMapping("specific", r"ats\.example\.com/form"),
        ]
        assert find_mapping(mappings, "https://ats.example.com/form").ats_name == "broad"

    def test_empty_list(self):
        assert find_mapping([], "https://hrmos.co/") is None


class TestLoadMappingsFile:
    def test_top_level_key(self, tmp_path):
        path = tmp_path / "mappings.yaml"
        path.write_text(
            "ats_mappings:\n"
            "  - atsName: custom\n"
            "    urlPattern: 'example\\.com'\n"
            "    fieldMappings:\n"
            "      - { sourceField: email, targetSelector: '#email', inputType: text }\n"
            "      - sourceField: gender\n"
            "        targetSelector: sex\n"
            "        inputType: radio\n"
            "        valueMapping: { 男性: m }\n",
            encoding="utf-8",
        )
        mappings = load_mappings_file(path)
        assert mappings == [
            ATSMapping("custom", r"example\.com", [
                FieldMapping("email", "#email", InputType.TEXT),
                FieldMapping("gender", "sex", InputType.RADIO, {"男性": "m"}),
            ]),
        ]

    def test_bare_list(self, tmp_path):
        path = tmp_path / "mappings.yaml"
        path.write_text("- atsName: a\n  urlPattern: a\n", encoding="utf-8")
        assert load_mappings_file(path)[0].field_mappings == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_mappings_file(tmp_path / "nope.yaml")

    def test_bad_input_type(self, tmp_path):
        path = tmp_path / "mappings.yaml"
        path.write_text(
            "- atsName: a\n  urlPattern: a\n  fieldMappings:\n"
            "    - { sourceField: email, targetSelector: '#e', inputType: checkbox }\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueError):
            load_mappings_file(path)

    def test_missing_required_key(self, tmp_path):
        path = tmp_path / "mappings.yaml"
        path.write_text("- urlPattern: a\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_mappings_file(path)


def test_validate_reports_unknown_source_fields():
    mappings = [ATSMapping("x", "x", [
        FieldMapping("email", "#e"),
        FieldMapping("middleName", "#m"),
    ])]
    assert validate_mappings(mappings) == [("x", "middleName")]
