"""Dispatch copier messages to storage, extraction and fill handlers.

Messages are dicts shaped {"type": ..., "data": ...}. Every handled message
gets exactly one reply dict with at least a "success" key; unknown types get
no reply at all (None). Replies hold only JSON-serializable values; records
are passed in their camelCase dict form.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Awaitable, Callable

from circus_copier import selectors
from circus_copier.extractor import CandidateExtractor
from circus_copier.filler import MappingFiller
from circus_copier.models import CandidateData, PageInfo
from circus_copier.page import PageAccessor
from circus_copier.storage import CandidateStore

logger = logging.getLogger("circus_copier")

Reply = dict[str, Any]
Handler = Callable[[Any], Awaitable[Reply]]


class MessageType(Enum):
    SAVE_CANDIDATE = "SAVE_CANDIDATE"
    GET_CANDIDATE = "GET_CANDIDATE"
    CLEAR_CANDIDATE = "CLEAR_CANDIDATE"
    EXTRACT_CANDIDATE = "EXTRACT_CANDIDATE"
    PASTE_CANDIDATE = "PASTE_CANDIDATE"
    GET_ATS_INFO = "GET_ATS_INFO"
    GET_PAGE_INFO = "GET_PAGE_INFO"


class MessageRouter:
    """Maps each MessageType to one async handler."""

    def __init__(
        self,
        store: CandidateStore,
        filler: MappingFiller,
        page_provider: Callable[[], PageAccessor],
        circus_url_marker: str = selectors.CIRCUS_URL_MARKER,
    ):
        self._store = store
        self._filler = filler
        self._page_provider = page_provider
        self._circus_url_marker = circus_url_marker
        self._handlers: dict[MessageType, Handler] = {
            MessageType.SAVE_CANDIDATE: self._save_candidate,
            MessageType.GET_CANDIDATE: self._get_candidate,
            MessageType.CLEAR_CANDIDATE: self._clear_candidate,
            MessageType.EXTRACT_CANDIDATE: self._extract_candidate,
            MessageType.PASTE_CANDIDATE: self._paste_candidate,
            MessageType.GET_ATS_INFO: self._get_ats_info,
            MessageType.GET_PAGE_INFO: self._get_page_info,
        }

    async def dispatch(self, message: dict) -> Reply | None:
        """Run the handler for `message` and return its reply.

        Returns None for unrecognized message types.
        """
        try:
            kind = MessageType(message.get("type"))
        except ValueError:
            logger.debug("Ignoring unknown message type: %r", message.get("type"))
            return None

        try:
            return await self._handlers[kind](message.get("data"))
        except Exception as e:
            logger.error("%s failed: %s", kind.value, e)
            return {"success": False, "error": str(e)}

    async def _save_candidate(self, data: Any) -> Reply:
        if isinstance(data, dict):
            data = CandidateData.from_dict(data)
        if not isinstance(data, CandidateData):
            return {"success": False, "error": "No candidate data to save."}
        self._store.save_candidate_data(data)
        return {"success": True}

    async def _get_candidate(self, _data: Any) -> Reply:
        candidate = self._store.get_candidate_data()
        return {"success": True, "data": candidate.to_dict() if candidate else None}

    async def _clear_candidate(self, _data: Any) -> Reply:
        self._store.clear_candidate_data()
        return {"success": True}

    async def _extract_candidate(self, _data: Any) -> Reply:
        candidate = await CandidateExtractor(self._page_provider()).extract()
        return {"success": candidate is not None, "data": candidate.to_dict() if candidate else None}

    async def _paste_candidate(self, _data: Any) -> Reply:
        candidate = self._store.get_candidate_data()
        if not candidate:
            return {
                "success": False,
                "filledCount": 0,
                "totalCount": 0,
                "error": "No candidate has been copied yet.",
            }

        result = await self._filler.fill(self._page_provider(), candidate)
        return {
            "success": result.success,
            "filledCount": result.filled_count,
            "totalCount": result.total_count,
            "data": result.to_dict(),
        }

    async def _get_ats_info(self, _data: Any) -> Reply:
        mapping = self._filler.match(await self._page_provider().url())
        return {"success": True, "atsName": mapping.ats_name if mapping else None}

    async def _get_page_info(self, _data: Any) -> Reply:
        url = await self._page_provider().url()
        mapping = self._filler.match(url)
        info = PageInfo(
            is_circus_page=self._circus_url_marker in url,
            is_ats_page=mapping is not None,
            ats_name=mapping.ats_name if mapping else None,
            url=url,
        )
        return {"success": True, "data": info.to_dict()}
