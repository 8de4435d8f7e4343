"""Page access layer: everything that touches the live DOM goes through here.

Extraction and fill logic only talk to a PageAccessor, so they can run
against the in-memory fake in tests and against Playwright for real.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from circus_copier import selectors

logger = logging.getLogger("circus_copier")

DEFAULT_WAIT_MS = 5000

# Text inputs on the ATS side are React/Angular controlled. Assigning
# el.value directly is swallowed by the framework's value tracker, so go
# through the prototype's native setter and then fire the events it listens to.
_SET_TEXT_JS = """([selector, value]) => {
    const el = document.querySelector(selector);
    if (!el) return false;
    const inputSetter = Object.getOwnPropertyDescriptor(
        window.HTMLInputElement.prototype, 'value')?.set;
    const textAreaSetter = Object.getOwnPropertyDescriptor(
        window.HTMLTextAreaElement.prototype, 'value')?.set;
    if (el instanceof HTMLInputElement && inputSetter) {
        inputSetter.call(el, value);
    } else if (el instanceof HTMLTextAreaElement && textAreaSetter) {
        textAreaSetter.call(el, value);
    } else {
        el.value = value;
    }
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
    return true;
}"""

_SET_SELECT_JS = """([selector, value]) => {
    const el = document.querySelector(selector);
    if (!el) return false;
    el.value = value;
    el.dispatchEvent(new Event('change', { bubbles: true }));
    return true;
}"""

_SET_RADIO_JS = """(selector) => {
    const radio = document.querySelector(selector);
    if (!radio) return false;
    radio.checked = true;
    radio.dispatchEvent(new Event('change', { bubbles: true }));
    return true;
}"""

_VALUE_BY_LABEL_JS = """([label, rowSel, labelSel, valueSel]) => {
    for (const row of document.querySelectorAll(rowSel)) {
        const labelEl = row.querySelector(labelSel);
        const valueEl = row.querySelector(valueSel);
        if (labelEl && labelEl.textContent.trim() === label && valueEl) {
            const p = valueEl.querySelector('p');
            return (p ? p.textContent : valueEl.textContent || '').trim();
        }
    }
    return '';
}"""


class PageAccessor(ABC):
    """The handful of DOM operations the copier needs."""

    @abstractmethod
    async def url(self) -> str: ...

    @abstractmethod
    async def value_by_label(self, label: str) -> str:
        """Return the value cell text of the row labeled `label`, or ""."""

    @abstractmethod
    async def text_of(self, selector: str) -> str: ...

    @abstractmethod
    async def exists(self, selector: str) -> bool: ...

    @abstractmethod
    async def set_text(self, selector: str, value: str) -> bool:
        """Set an input/textarea value and fire input + change. False if absent."""

    @abstractmethod
    async def set_select(self, selector: str, value: str) -> bool:
        """Set a select's value and fire change. False if absent."""

    @abstractmethod
    async def set_radio(self, name: str, value: str) -> bool:
        """Check the radio with this name/value pair and fire change."""

    @abstractmethod
    async def wait_for_element(self, selector: str, timeout_ms: int = DEFAULT_WAIT_MS) -> bool: ...


class PlaywrightPageAccessor(PageAccessor):
    """PageAccessor over a Playwright page."""

    def __init__(self, page: Page):
        self._page = page

    async def url(self) -> str:
        return self._page.url

    async def value_by_label(self, label: str) -> str:
        return await self._page.evaluate(
            _VALUE_BY_LABEL_JS,
            [label, selectors.LABEL_ROW, selectors.LABEL_CELL, selectors.VALUE_CELL],
        )

    async def text_of(self, selector: str) -> str:
        el = await self._page.query_selector(selector)
        if not el:
            return ""
        return ((await el.text_content()) or "").strip()

    async def exists(self, selector: str) -> bool:
        return await self._page.query_selector(selector) is not None

    async def set_text(self, selector: str, value: str) -> bool:
        return await self._page.evaluate(_SET_TEXT_JS, [selector, value])

    async def set_select(self, selector: str, value: str) -> bool:
        return await self._page.evaluate(_SET_SELECT_JS, [selector, value])

    async def set_radio(self, name: str, value: str) -> bool:
        selector = selectors.RADIO_TEMPLATE.format(name=name, value=value)
        return await self._page.evaluate(_SET_RADIO_JS, selector)

    async def wait_for_element(self, selector: str, timeout_ms: int = DEFAULT_WAIT_MS) -> bool:
        try:
            await self._page.wait_for_selector(selector, state="attached", timeout=timeout_ms)
            return True
        except PlaywrightTimeoutError:
            logger.debug("Timed out after %dms waiting for %s", timeout_ms, selector)
            return False
