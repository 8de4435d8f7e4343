"""Paste a stored candidate into an ATS registration form.

Picks the ATS mapping for the current URL, then walks its field table and
writes each value with the setter for that control type. Missing controls are
skipped, not fatal.
"""

from __future__ import annotations

import logging

from circus_copier.mappings import find_mapping
from circus_copier.models import ATSMapping, CandidateData, FieldMapping, FillResult, InputType
from circus_copier.page import PageAccessor

logger = logging.getLogger("circus_copier")


class MappingFiller:
    """Fills ATS forms according to an injected list of ATS mappings."""

    def __init__(self, mappings: list[ATSMapping]):
        self._mappings = list(mappings)

    @property
    def mappings(self) -> list[ATSMapping]:
        return list(self._mappings)

    def match(self, url: str) -> ATSMapping | None:
        return find_mapping(self._mappings, url)

    async def fill(self, page: PageAccessor, candidate: CandidateData) -> FillResult:
        """Fill every mapped field that exists on the page.

        Success means at least one field was written; a partial fill still
        counts as success.
        """
        url = await page.url()
        mapping = self.match(url)
        if not mapping:
            logger.warning("No ATS mapping matches %s", url)
            return FillResult(success=False)

        result = FillResult(
            success=False,
            total_count=len(mapping.field_mappings),
            ats_name=mapping.ats_name,
        )

        for field_mapping in mapping.field_mappings:
            try:
                filled = await self._fill_field(page, field_mapping, candidate)
            except Exception as e:
                logger.warning("Failed to fill %s: %s", field_mapping.target_selector, e)
                filled = False
            if filled:
                result.filled_count += 1
            else:
                result.skipped_selectors.append(field_mapping.target_selector)

        result.success = result.filled_count > 0
        logger.info(
            "Filled %d/%d fields on %s.",
            result.filled_count, result.total_count, mapping.ats_name,
        )
        return result

    async def _fill_field(
        self,
        page: PageAccessor,
        field_mapping: FieldMapping,
        candidate: CandidateData,
    ) -> bool:
        value = candidate.get(field_mapping.source_field)
        if field_mapping.value_mapping and value in field_mapping.value_mapping:
            value = field_mapping.value_mapping[value]

        selector = field_mapping.target_selector
        input_type = field_mapping.input_type

        if input_type in (InputType.TEXT, InputType.TEXTAREA):
            filled = await page.set_text(selector, value)
        elif input_type == InputType.SELECT:
            filled = await page.set_select(selector, value)
        elif input_type == InputType.RADIO:
            # target_selector holds the radio group's name attribute
            filled = await page.set_radio(selector, value)
        else:
            logger.warning("Unsupported input type: %s", input_type)
            return False

        if not filled:
            logger.warning("Element not found: %s", selector)
        return filled
