"""Data models for candidates, ATS field mappings, and fill results."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum


class InputType(Enum):
    TEXT = "text"
    SELECT = "select"
    RADIO = "radio"
    TEXTAREA = "textarea"


# Python attribute name -> storage key (camelCase, as the extension stored it)
CANDIDATE_KEYS = {
    "id": "id",
    "last_name": "lastName",
    "first_name": "firstName",
    "full_name": "fullName",
    "last_name_kana": "lastNameKana",
    "first_name_kana": "firstNameKana",
    "full_name_kana": "fullNameKana",
    "age": "age",
    "gender": "gender",
    "residence": "residence",
    "company_count": "companyCount",
    "job_type": "jobType",
    "industry": "industry",
    "management_experience": "managementExperience",
    "education": "education",
    "school_name": "schoolName",
    "current_salary": "currentSalary",
    "desired_salary": "desiredSalary",
    "salary_info": "salaryInfo",
    "phone": "phone",
    "email": "email",
    "recommendation": "recommendation",
    "transfer_reason": "transferReason",
    "copied_at": "copiedAt",
    "source_url": "sourceUrl",
}

SOURCE_FIELDS = {key: attr for attr, key in CANDIDATE_KEYS.items()}


@dataclass
class CandidateData:
    """The most recently copied candidate. Overwritten wholesale on each copy."""

    id: str = ""
    last_name: str = ""
    first_name: str = ""
    full_name: str = ""
    last_name_kana: str = ""
    first_name_kana: str = ""
    full_name_kana: str = ""
    age: int | None = None
    gender: str = ""
    residence: str = ""

    company_count: str = ""
    job_type: str = ""
    industry: str = ""
    management_experience: str = ""

    education: str = ""
    school_name: str = ""

    current_salary: str = ""
    desired_salary: str = ""
    salary_info: str = ""

    phone: str = ""
    email: str = ""

    recommendation: str = ""
    transfer_reason: str = ""

    copied_at: str = ""
    source_url: str = ""

    def get(self, source_field: str) -> str:
        """Resolve a camelCase source field to its string value.

        Unknown fields and empty values both come back as "".
        """
        attr = SOURCE_FIELDS.get(source_field)
        if attr is None:
            return ""
        value = getattr(self, attr)
        return "" if value is None else str(value)

    def to_dict(self) -> dict:
        return {CANDIDATE_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, raw: dict) -> CandidateData:
        kwargs = {}
        for key, value in raw.items():
            attr = SOURCE_FIELDS.get(key)
            if attr is not None:
                kwargs[attr] = value
        return cls(**kwargs)

    @property
    def copied_at_display(self) -> str:
        """copied_at rendered in local time, or the raw string if unparseable."""
        if not self.copied_at:
            return ""
        try:
            stamp = datetime.fromisoformat(self.copied_at.replace("Z", "+00:00"))
        except ValueError:
            return self.copied_at
        return stamp.astimezone().strftime("%Y/%m/%d %H:%M:%S")


@dataclass
class FieldMapping:
    """One candidate field written into one target form control."""

    source_field: str
    target_selector: str
    input_type: InputType = InputType.TEXT
    value_mapping: dict[str, str] | None = None

    def to_dict(self) -> dict:
        raw = {
            "sourceField": self.source_field,
            "targetSelector": self.target_selector,
            "inputType": self.input_type.value,
        }
        if self.value_mapping:
            raw["valueMapping"] = dict(self.value_mapping)
        return raw

    @classmethod
    def from_dict(cls, raw: dict) -> FieldMapping:
        return cls(
            source_field=raw["sourceField"],
            target_selector=raw["targetSelector"],
            input_type=InputType(raw.get("inputType", "text")),
            value_mapping=raw.get("valueMapping") or None,
        )


@dataclass
class ATSMapping:
    ats_name: str
    url_pattern: str
    field_mappings: list[FieldMapping] = field(default_factory=list)

    def matches(self, url: str) -> bool:
        return re.search(self.url_pattern, url) is not None

    def to_dict(self) -> dict:
        return {
            "atsName": self.ats_name,
            "urlPattern": self.url_pattern,
            "fieldMappings": [m.to_dict() for m in self.field_mappings],
        }

    @classmethod
    def from_dict(cls, raw: dict) -> ATSMapping:
        return cls(
            ats_name=raw["atsName"],
            url_pattern=raw["urlPattern"],
            field_mappings=[FieldMapping.from_dict(m) for m in raw.get("fieldMappings", [])],
        )


@dataclass
class FillResult:
    success: bool
    filled_count: int = 0
    total_count: int = 0
    ats_name: str | None = None
    skipped_selectors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "filledCount": self.filled_count,
            "totalCount": self.total_count,
            "atsName": self.ats_name,
            "skippedSelectors": list(self.skipped_selectors),
        }

    @classmethod
    def from_dict(cls, raw: dict) -> FillResult:
        return cls(
            success=raw.get("success", False),
            filled_count=raw.get("filledCount", 0),
            total_count=raw.get("totalCount", 0),
            ats_name=raw.get("atsName"),
            skipped_selectors=list(raw.get("skippedSelectors", [])),
        )


@dataclass
class PageInfo:
    is_circus_page: bool
    is_ats_page: bool
    ats_name: str | None
    url: str

    def to_dict(self) -> dict:
        return {
            "isCircusPage": self.is_circus_page,
            "isATSPage": self.is_ats_page,
            "atsName": self.ats_name,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> PageInfo:
        return cls(
            is_circus_page=raw.get("isCircusPage", False),
            is_ats_page=raw.get("isATSPage", False),
            ats_name=raw.get("atsName"),
            url=raw.get("url", ""),
        )


class HistoryAction(Enum):
    COPY = "copy"
    PASTE = "paste"
    CLEAR = "clear"


@dataclass
class HistoryEntry:
    action: HistoryAction
    url: str
    candidate_id: str = ""
    candidate_name: str = ""
    ats_name: str = ""
    filled_count: int = 0
    total_count: int = 0
    success: bool = True
    timestamp: datetime = field(default_factory=datetime.now)
    notes: str = ""
