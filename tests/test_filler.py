"""Tests for mapping-driven form filling."""

import pytest

from conftest import FakePage

from circus_copier.filler import MappingFiller
from circus_copier.mappings import default_ats_mappings
from circus_copier.models import ATSMapping, FieldMapping, InputType

SONAR_URL = "https://manager.snar.jp/jobs/1/candidates/new"
SONAR_CONTROLS = [
    'input[name="last_name"]',
    'input[name="first_name"]',
    'input[name="last_name_kana"]',
    'input[name="first_name_kana"]',
    'input[name="email"]',
    'input[name="phone"]',
    'select[name="gender"]',
]


@pytest.fixture
def filler():
    return MappingFiller(default_ats_mappings())


@pytest.fixture
def sonar_page():
    return FakePage(url=SONAR_URL, controls=SONAR_CONTROLS)


class TestMappingFiller:
    @pytest.mark.asyncio
    async def test_fills_every_sonar_field(self, filler, sonar_page, candidate):
        result = await filler.fill(sonar_page, candidate)

        assert result.success
        assert (result.filled_count, result.total_count) == (7, 7)
        assert result.ats_name == "sonarATS"
        assert sonar_page.values['input[name="last_name"]'] == "佐々木"
        assert sonar_page.values['input[name="first_name_kana"]'] == "ことわ"
        assert sonar_page.values['input[name="phone"]'] == "090-1234-5678"

    @pytest.mark.asyncio
    async def test_value_mapping_translates_gender(self, filler, sonar_page, candidate):
        await filler.fill(sonar_page, candidate)
        assert sonar_page.values['select[name="gender"]'] == "male"

    @pytest.mark.asyncio
    async def test_unmapped_value_passes_through(self, filler, sonar_page, candidate):
        candidate.gender = "回答しない"
        await filler.fill(sonar_page, candidate)
        assert sonar_page.values['select[name="gender"]'] == "回答しない"

    @pytest.mark.asyncio
    async def test_events_per_input_type(self, filler, sonar_page, candidate):
        await filler.fill(sonar_page, candidate)
        assert sonar_page.events.count(('input[name="email"]', "input")) == 1
        assert sonar_page.events.count(('input[name="email"]', "change")) == 1
        assert ('select[name="gender"]', "input") not in sonar_page.events
        assert sonar_page.events.count(('select[name="gender"]', "change")) == 1

    @pytest.mark.asyncio
    async def test_filling_twice_is_idempotent(self, filler, sonar_page, candidate):
        await filler.fill(sonar_page, candidate)
        first_values = dict(sonar_page.values)
        first_events = list(sonar_page.events)

        await filler.fill(sonar_page, candidate)

        assert sonar_page.values == first_values
        assert sonar_page.events == first_events * 2

    @pytest.mark.asyncio
    async def test_missing_elements_are_skipped(self, filler, candidate):
        page = FakePage(url=SONAR_URL, controls=SONAR_CONTROLS[:2])
        result = await filler.fill(page, candidate)

        assert result.success
        assert (result.filled_count, result.total_count) == (2, 7)
        assert 'input[name="email"]' in result.skipped_selectors
        assert len(result.skipped_selectors) == 5

    @pytest.mark.asyncio
    async def test_nothing_filled_is_failure(self, filler, candidate):
        result = await filler.fill(FakePage(url=SONAR_URL), candidate)
        assert not result.success
        assert (result.filled_count, result.total_count) == (0, 7)

    @pytest.mark.asyncio
    async def test_no_matching_mapping(self, filler, candidate):
        result = await filler.fill(FakePage(url="https://example.com/"), candidate)
        assert not result.success
        assert (result.filled_count, result.total_count) == (0, 0)
        assert result.ats_name is None

    @pytest.mark.asyncio
    async def test_first_matching_mapping_is_used(self, candidate):
        filler = MappingFiller([
            ATSMapping("first", r"example\.com", [FieldMapping("email", "#a")]),
            ATSMapping("second", r"example\.com/form", [FieldMapping("email", "#b")]),
        ])
        page = FakePage(url="https://example.com/form", controls=["#a", "#b"])

        result = await filler.fill(page, candidate)

        assert result.ats_name == "first"
        assert page.values == {"#a": "sasaki@example.com", "#b": ""}

    @pytest.mark.asyncio
    async def test_radio_uses_name_and_value(self, candidate):
        filler = MappingFiller([
            ATSMapping("radio-ats", r"example\.com", [
                FieldMapping("gender", "sex", InputType.RADIO, {"男性": "1", "女性": "2"}),
            ]),
        ])
        page = FakePage(url="https://example.com/", radios=[("sex", "1"), ("sex", "2")])

        result = await filler.fill(page, candidate)

        assert result.success
        assert page.radios == {("sex", "1"): True, ("sex", "2"): False}
        assert page.events == [("sex=1", "change")]

    @pytest.mark.asyncio
    async def test_unknown_source_field_fills_empty_string(self, candidate):
        filler = MappingFiller([
            ATSMapping("x", r"example\.com", [FieldMapping("middleName", "#m")]),
        ])
        page = FakePage(url="https://example.com/", controls=["#m"])
        page.values["#m"] = "stale"

        result = await filler.fill(page, candidate)

        assert result.success
        assert page.values["#m"] == ""

    @pytest.mark.asyncio
    async def test_hrmos_full_name_fields(self, filler, candidate):
        name_sel = 'input[placeholder="例）田中 太郎"]'
        kana_sel = 'input[placeholder="例）たなか たろう"]'
        page = FakePage(url="https://hrmos.co/agent/candidates/new", controls=[name_sel, kana_sel])

        result = await filler.fill(page, candidate)

        assert (result.filled_count, result.total_count) == (2, 7)
        assert page.values[name_sel] == "佐々木 思和"
        assert page.values[kana_sel] == "ささき ことわ"

    def test_injected_list_is_copied(self):
        mappings = default_ats_mappings()
        filler = MappingFiller(mappings)
        mappings.clear()
        assert filler.match(SONAR_URL).ats_name == "sonarATS"

    @pytest.mark.asyncio
    async def test_setter_error_skips_field_and_continues(self, filler, sonar_page, candidate, caplog):
        async def set_text(selector, value):
            if selector == 'input[name="first_name"]':
                raise RuntimeError("TypeError: Illegal invocation")
            return await FakePage.set_text(sonar_page, selector, value)

        sonar_page.set_text = set_text

        result = await filler.fill(sonar_page, candidate)

        assert result.success
        assert (result.filled_count, result.total_count) == (6, 7)
        assert result.skipped_selectors == ['input[name="first_name"]']
        assert sonar_page.values['input[name="email"]'] == "sasaki@example.com"
        assert sonar_page.values['select[name="gender"]'] == "male"
        assert "Illegal invocation" in caplog.text
