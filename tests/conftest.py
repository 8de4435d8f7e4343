"""Shared fixtures: an in-memory PageAccessor and a sample candidate."""

from __future__ import annotations

import pytest

from circus_copier import selectors
from circus_copier.models import CandidateData
from circus_copier.page import PageAccessor

CIRCUS_URL = "https://circus-job.com/selections/12345"

CIRCUS_LABELS = {
    "求職者ID": "A-0001",
    "求職者名": "佐々木 思和 (23歳)",
    "ふりがな": "ささきことわ",
    "性別": "男性",
    "居住地": "東京都渋谷区",
    "経験社数": "2社",
    "経験職種": "営業",
    "経験業種": "IT",
    "マネジメント経験": "なし",
    "最終学歴": "大学卒",
    "卒業学校名": "東京大学",
    "現在の年収": "350万円",
    "希望年収": "400万円",
    "電話番号": "090-1234-5678",
    "メールアドレス": "sasaki@example.com",
}


class FakePage(PageAccessor):
    """DOM stand-in that records every dispatched event."""

    def __init__(
        self,
        url: str = "",
        labels: dict[str, str] | None = None,
        texts: dict[str, str] | None = None,
        controls: list[str] | None = None,
        radios: list[tuple[str, str]] | None = None,
    ):
        self._url = url
        self.labels = dict(labels or {})
        self.texts = dict(texts or {})
        self.values: dict[str, str] = {selector: "" for selector in controls or []}
        self.radios: dict[tuple[str, str], bool] = {key: False for key in radios or []}
        self.events: list[tuple[str, str]] = []

    async def url(self) -> str:
        return self._url

    async def value_by_label(self, label: str) -> str:
        return self.labels.get(label, "").strip()

    async def text_of(self, selector: str) -> str:
        return self.texts.get(selector, "").strip()

    async def exists(self, selector: str) -> bool:
        return selector in self.values or selector in self.texts

    async def set_text(self, selector: str, value: str) -> bool:
        if selector not in self.values:
            return False
        self.values[selector] = value
        self.events.append((selector, "input"))
        self.events.append((selector, "change"))
        return True

    async def set_select(self, selector: str, value: str) -> bool:
        if selector not in self.values:
            return False
        self.values[selector] = value
        self.events.append((selector, "change"))
        return True

    async def set_radio(self, name: str, value: str) -> bool:
        if (name, value) not in self.radios:
            return False
        self.radios[(name, value)] = True
        self.events.append((f"{name}={value}", "change"))
        return True

    async def wait_for_element(self, selector: str, timeout_ms: int = 5000) -> bool:
        return await self.exists(selector)


@pytest.fixture
def circus_page():
    """A Circus candidate page with every row filled in."""
    return FakePage(
        url=CIRCUS_URL,
        labels=CIRCUS_LABELS,
        texts={
            selectors.RECOMMENDATION: "  明るく前向きな方です。  ",
            selectors.TRANSFER_REASON: "キャリアアップのため",
        },
    )


@pytest.fixture
def candidate():
    return CandidateData(
        id="A-0001",
        last_name="佐々木",
        first_name="思和",
        full_name="佐々木 思和",
        last_name_kana="ささき",
        first_name_kana="ことわ",
        full_name_kana="ささき ことわ",
        age=23,
        gender="男性",
        residence="東京都渋谷区",
        school_name="東京大学",
        current_salary="350万円",
        desired_salary="400万円",
        salary_info="現在の年収: 350万円\n希望年収: 400万円",
        phone="090-1234-5678",
        email="sasaki@example.com",
        recommendation="明るく前向きな方です。",
        transfer_reason="キャリアアップのため",
        copied_at="2026-10-19T03:00:00.000+00:00",
        source_url=CIRCUS_URL,
    )
