"""Read a candidate off a Circus selection page.

The candidate panel is a column of "label | value" rows; each field is looked
up by its Japanese label. The name and kana rows need splitting, the rest are
copied through as-is.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from circus_copier import selectors
from circus_copier.models import CandidateData
from circus_copier.page import PageAccessor
from circus_copier.parser import split_kana, split_name

logger = logging.getLogger("circus_copier")

# Row labels as shown on the Circus candidate panel
LABEL_ID = "求職者ID"
LABEL_NAME = "求職者名"
LABEL_KANA = "ふりがな"

# Candidate attribute -> row label, for fields copied without transformation
PLAIN_LABELS = {
    "gender": "性別",
    "residence": "居住地",
    "company_count": "経験社数",
    "job_type": "経験職種",
    "industry": "経験業種",
    "management_experience": "マネジメント経験",
    "education": "最終学歴",
    "school_name": "卒業学校名",
    "current_salary": "現在の年収",
    "desired_salary": "希望年収",
    "phone": "電話番号",
    "email": "メールアドレス",
}


def format_salary_info(current: str, desired: str) -> str:
    """Combined salary text pasted into a single free-text ATS field."""
    return f"現在の年収: {current}\n希望年収: {desired}"


class CandidateExtractor:
    """Builds a CandidateData from the page currently open on Circus."""

    def __init__(self, page: PageAccessor):
        self._page = page

    async def extract(self) -> CandidateData | None:
        """Extract the candidate, or None if the page has no candidate name.

        Any failure while reading the page is logged and reported as None.
        """
        try:
            full_name = await self._page.value_by_label(LABEL_NAME)
            if not full_name:
                logger.error("Candidate name row (%s) not found.", LABEL_NAME)
                return None

            name = split_name(full_name)
            kana = split_kana(await self._page.value_by_label(LABEL_KANA), len(name.last_name))

            plain = {
                attr: await self._page.value_by_label(label)
                for attr, label in PLAIN_LABELS.items()
            }

            candidate = CandidateData(
                id=await self._page.value_by_label(LABEL_ID),
                last_name=name.last_name,
                first_name=name.first_name,
                full_name=f"{name.last_name} {name.first_name}",
                last_name_kana=kana.last_name_kana,
                first_name_kana=kana.first_name_kana,
                full_name_kana=f"{kana.last_name_kana} {kana.first_name_kana}",
                age=name.age,
                salary_info=format_salary_info(plain["current_salary"], plain["desired_salary"]),
                recommendation=await self._page.text_of(selectors.RECOMMENDATION),
                transfer_reason=await self._page.text_of(selectors.TRANSFER_REASON),
                copied_at=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
                source_url=await self._page.url(),
                **plain,
            )
        except Exception as e:
            logger.error("Failed to extract candidate data: %s", e)
            return None

        logger.info("Extracted candidate %s (%s).", candidate.full_name, candidate.id or "no id")
        return candidate
