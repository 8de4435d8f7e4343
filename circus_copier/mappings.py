"""Default ATS field mappings and helpers to load, match and check them.

Each ATS is recognized by a URL regex and carries a table of
(candidate field -> form control) rules. Mapping lists are ordered: when two
patterns match the same URL the earlier entry wins.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from circus_copier.models import SOURCE_FIELDS, ATSMapping, FieldMapping, InputType

logger = logging.getLogger("circus_copier")

GENDER_MAP = {"男性": "male", "女性": "female"}


def _text(source: str, selector: str) -> FieldMapping:
    return FieldMapping(source, selector, InputType.TEXT)


def _textarea(source: str, selector: str) -> FieldMapping:
    return FieldMapping(source, selector, InputType.TEXTAREA)


def default_ats_mappings() -> list[ATSMapping]:
    """The built-in sonarATS, talentio and HRMOS mappings, in match order."""
    return [
        ATSMapping(
            ats_name="sonarATS",
            url_pattern=r"manager\.snar\.jp",
            field_mappings=[
                _text("lastName", 'input[name="last_name"]'),
                _text("firstName", 'input[name="first_name"]'),
                _text("lastNameKana", 'input[name="last_name_kana"]'),
                _text("firstNameKana", 'input[name="first_name_kana"]'),
                _text("email", 'input[name="email"]'),
                _text("phone", 'input[name="phone"]'),
                FieldMapping(
                    "gender",
                    'select[name="gender"]',
                    InputType.SELECT,
                    value_mapping=dict(GENDER_MAP),
                ),
            ],
        ),
        ATSMapping(
            ats_name="talentio",
            url_pattern=r"agent\.talentio\.com",
            field_mappings=[
                _text("lastName", 'input[name="lastName"]'),
                _text("firstName", 'input[name="firstName"]'),
                _text("lastNameKana", 'input[name="lastNameKana"]'),
                _text("firstNameKana", 'input[name="firstNameKana"]'),
                _text("phone", 'input[name="phone"]'),
                _text("email", 'input[name="email"]'),
                _textarea("recommendation", 'textarea[name="description"]'),
                _textarea("salaryInfo", 'textarea[name="description2"]'),
            ],
        ),
        ATSMapping(
            ats_name="HRMOS",
            url_pattern=r"hrmos\.co",
            field_mappings=[
                _text("fullName", 'input[placeholder="例）田中 太郎"]'),
                _text("fullNameKana", 'input[placeholder="例）たなか たろう"]'),
                _text("phone", 'input[placeholder="電話番号"]'),
                _text("email", 'input[type="email"][placeholder="メールアドレス"]'),
                _text("residence", 'input[placeholder="例）東京都渋谷区渋谷2-15-1"]'),
                _text("schoolName", 'input[placeholder="例）株式会社ビズリーチ"]'),
                _textarea("recommendation", 'textarea[hrm-input][type="text"]'),
            ],
        ),
    ]


def find_mapping(mappings: list[ATSMapping], url: str) -> ATSMapping | None:
    """Return the first mapping whose URL pattern matches, in list order."""
    for mapping in mappings:
        if mapping.matches(url):
            return mapping
    return None


def load_mappings_file(path: Path) -> list[ATSMapping]:
    """Load an ATS mapping list from YAML.

    The file holds either a top-level list or an `ats_mappings:` key, each
    entry shaped like the stored form (atsName, urlPattern, fieldMappings).
    """
    if not path.exists():
        raise FileNotFoundError(f"Mappings file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or []

    if isinstance(raw, dict):
        raw = raw.get("ats_mappings", [])
    if not isinstance(raw, list):
        raise ValueError(f"Expected a list of ATS mappings in {path}")

    try:
        mappings = [ATSMapping.from_dict(entry) for entry in raw]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid ATS mapping in {path}: {e}") from e

    logger.info("Loaded %d ATS mappings from %s", len(mappings), path)
    return mappings


def validate_mappings(mappings: list[ATSMapping]) -> list[tuple[str, str]]:
    """Return (ats_name, source_field) pairs that name no candidate field.

    These would silently paste an empty string.
    """
    problems = []
    for mapping in mappings:
        for fm in mapping.field_mappings:
            if fm.source_field not in SOURCE_FIELDS:
                problems.append((mapping.ats_name, fm.source_field))
    return problems
