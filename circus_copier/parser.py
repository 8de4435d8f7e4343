"""String helpers for Circus candidate fields: names, kana, salary, phone."""

from __future__ import annotations

import re
from typing import NamedTuple

AGE_PATTERN = re.compile(r"\(([0-9]+)歳\)")
AGE_SUFFIX = re.compile(r"\s*\([0-9]+歳\)")


class NameParts(NamedTuple):
    last_name: str
    first_name: str
    age: int | None


class KanaParts(NamedTuple):
    last_name_kana: str
    first_name_kana: str


def split_name(full_name: str) -> NameParts:
    """Split "佐々木 思和 (23歳)" into surname, given name and age.

    The first whitespace-separated token is the surname; everything after it
    is the given name, re-joined with single spaces.
    """
    age_match = AGE_PATTERN.search(full_name)
    age = int(age_match.group(1)) if age_match else None

    name_only = AGE_SUFFIX.sub("", full_name, count=1).strip()
    parts = name_only.split()

    return NameParts(
        last_name=parts[0] if parts else "",
        first_name=" ".join(parts[1:]),
        age=age,
    )


def split_kana(kana: str, last_name_length: int) -> KanaParts:
    """Split an unspaced kana reading at the surname's character count.

    The reading is assumed to have as many characters for the surname as the
    kanji surname has. When that doesn't hold the split lands in the wrong
    place and nothing flags it.
    """
    return KanaParts(
        last_name_kana=kana[:last_name_length],
        first_name_kana=kana[last_name_length:],
    )


def parse_salary(salary: str) -> int | None:
    """"350万円" -> 350. Returns None when there are no digits."""
    match = re.search(r"([0-9]+)", salary)
    return int(match.group(1)) if match else None


def normalize_phone(phone: str) -> str:
    return phone.replace("-", "")


def format_phone(phone: str) -> str:
    """Hyphenate 11-digit mobile and 10-digit landline numbers."""
    digits = re.sub(r"[^0-9]", "", phone)
    if len(digits) == 11:
        # mobile: 090-1234-5678
        return f"{digits[:3]}-{digits[3:7]}-{digits[7:]}"
    if len(digits) == 10:
        # landline: 03-1234-5678
        return f"{digits[:2]}-{digits[2:6]}-{digits[6:]}"
    return phone
