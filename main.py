#!/usr/bin/env python3
"""Circus ATS Copier - copy a candidate from Circus and paste it into an ATS.

Usage:
    python main.py --copy URL              # Extract the candidate on a Circus page
    python main.py --paste URL             # Fill an ATS form with the copied candidate
    python main.py --show                  # Show the copied candidate
    python main.py --clear                 # Forget the copied candidate
    python main.py --check-selectors URL   # Verify ATS mapping selectors on a form
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from circus_copier import selectors
from circus_copier.browser import BrowserManager
from circus_copier.config_loader import Config, load_config
from circus_copier.filler import MappingFiller
from circus_copier.history import HistoryLog
from circus_copier.mappings import validate_mappings
from circus_copier.models import (
    CandidateData,
    FillResult,
    HistoryAction,
    HistoryEntry,
    InputType,
    PageInfo,
)
from circus_copier.popup import StatusView
from circus_copier.router import MessageRouter, MessageType
from circus_copier.storage import CandidateStore, KeyValueStore
from circus_copier.utils import setup_logging

logger = logging.getLogger("circus_copier")


def build_store(config: Config) -> CandidateStore:
    return CandidateStore(KeyValueStore(config.storage_path), config.ats_mappings)


def build_router(config: Config, browser: BrowserManager) -> tuple[MessageRouter, CandidateStore]:
    store = build_store(config)
    filler = MappingFiller(store.get_ats_mappings())
    router = MessageRouter(
        store,
        filler,
        page_provider=browser.accessor,
        circus_url_marker=config.circus_url_marker,
    )
    return router, store


async def run_copy(config: Config, url: str) -> bool:
    """Open a Circus candidate page, extract the candidate and save it."""
    browser = BrowserManager(
        user_data_dir=config.browser.user_data_dir,
        headless=config.browser.headless,
        slow_mo=config.browser.slow_mo,
    )
    router, _ = build_router(config, browser)
    history = HistoryLog(config.history_dir)
    view = StatusView()

    try:
        await browser.open(url)
        if not await browser.accessor().wait_for_element(selectors.LABEL_ROW):
            logger.warning("Candidate panel did not render; extracting anyway.")

        reply = await router.dispatch({"type": MessageType.EXTRACT_CANDIDATE.value})
        raw = reply.get("data") if reply else None
        if not reply or not reply["success"] or not raw:
            view.error("コピーに失敗しました。ページを再読み込みしてください。")
            history.record(HistoryEntry(
                action=HistoryAction.COPY, url=url, success=False,
                notes=(reply or {}).get("error", "extract_failed"),
            ))
            return False

        candidate = CandidateData.from_dict(raw)
        saved = await router.dispatch({"type": MessageType.SAVE_CANDIDATE.value, "data": raw})
        if not saved or not saved["success"]:
            view.error(f"保存に失敗しました: {(saved or {}).get('error', '')}")
            return False

        history.record(HistoryEntry(
            action=HistoryAction.COPY, url=url,
            candidate_id=candidate.id, candidate_name=candidate.full_name,
        ))
        view.success("候補者情報をコピーしました！")
        view.show_candidate(candidate)
        return True
    finally:
        await browser.close()


async def run_paste(config: Config, url: str) -> bool:
    """Open an ATS form and fill it with the stored candidate."""
    browser = BrowserManager(
        user_data_dir=config.browser.user_data_dir,
        headless=config.browser.headless,
        slow_mo=config.browser.slow_mo,
    )
    router, store = build_router(config, browser)
    history = HistoryLog(config.history_dir)
    view = StatusView()

    candidate = store.get_candidate_data()
    if not candidate:
        view.error("候補者がコピーされていません。先に --copy を実行してください。")
        return False

    try:
        await browser.open(url)
        page_reply = await router.dispatch({"type": MessageType.GET_PAGE_INFO.value})
        if not page_reply or not page_reply.get("data"):
            view.error(f"ページ情報の取得に失敗しました: {(page_reply or {}).get('error', '')}")
            return False
        info = PageInfo.from_dict(page_reply["data"])
        view.show_page(info)
        if not info.is_ats_page:
            view.error("対応ページではありません")
            return False

        reply = await router.dispatch({"type": MessageType.PASTE_CANDIDATE.value})
        if not reply or not reply.get("data"):
            view.error(f"貼り付けに失敗しました: {(reply or {}).get('error', '')}")
            return False
        result = FillResult.from_dict(reply["data"])

        view.show_fill_result(result)
        history.record(HistoryEntry(
            action=HistoryAction.PASTE, url=url,
            candidate_id=candidate.id, candidate_name=candidate.full_name,
            ats_name=result.ats_name or "",
            filled_count=result.filled_count, total_count=result.total_count,
            success=result.success,
            notes=", ".join(result.skipped_selectors),
        ))

        if not config.browser.headless:
            # Leave the form open so the recruiter can review and submit it
            await asyncio.to_thread(input, "Review the form in the browser, then press Enter to close...")
        return result.success
    finally:
        await browser.close()


async def run_show(config: Config) -> None:
    browser = BrowserManager(user_data_dir=config.browser.user_data_dir)
    router, _ = build_router(config, browser)
    reply = await router.dispatch({"type": MessageType.GET_CANDIDATE.value})
    raw = reply.get("data") if reply else None
    StatusView().show_candidate(CandidateData.from_dict(raw) if raw else None)

    summary = HistoryLog(config.history_dir).summary()
    if summary:
        print(f"\n  Copies: {summary.get('copy', 0)}  Pastes: {summary.get('paste', 0)}")


async def run_clear(config: Config) -> None:
    browser = BrowserManager(user_data_dir=config.browser.user_data_dir)
    router, store = build_router(config, browser)
    candidate = store.get_candidate_data()
    await router.dispatch({"type": MessageType.CLEAR_CANDIDATE.value})
    HistoryLog(config.history_dir).record(HistoryEntry(
        action=HistoryAction.CLEAR, url="",
        candidate_id=candidate.id if candidate else "",
        candidate_name=candidate.full_name if candidate else "",
    ))
    StatusView().success("コピー済み候補者をクリアしました。")


async def run_check_selectors(config: Config, url: str) -> None:
    """Open an ATS form and report which mapping selectors match.

    Checks the same mapping list --paste fills from, stored overrides included.
    """
    mappings = build_store(config).get_ats_mappings()
    for ats_name, source_field in validate_mappings(mappings):
        print(f"  [WARN] {ats_name}: '{source_field}' is not a candidate field")

    browser = BrowserManager(
        user_data_dir=config.browser.user_data_dir,
        headless=config.browser.headless,
        slow_mo=config.browser.slow_mo,
    )
    filler = MappingFiller(mappings)

    try:
        await browser.open(url)
        page = browser.accessor()
        mapping = filler.match(await page.url())
        if not mapping:
            print(f"  No ATS mapping matches {url}")
            return

        print(f"\n  {mapping.ats_name} ({mapping.url_pattern})")
        if mapping.field_mappings:
            await page.wait_for_element(mapping.field_mappings[0].target_selector)
        for fm in mapping.field_mappings:
            selector = fm.target_selector
            if fm.input_type == InputType.RADIO:
                selector = f'input[type="radio"][name="{fm.target_selector}"]'
            try:
                found = await page.exists(selector)
                status = "PASS" if found else "FAIL"
                print(f"  [{status}] {fm.source_field}: {selector}")
            except Exception as e:
                print(f"  [ERROR] {fm.source_field}: {e}")

        print("\nIf any selectors show FAIL, override them in a mappings file (see config.example.yaml).")
    finally:
        await browser.close()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Circus ATS Copier - copy candidates from Circus into an ATS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Copy:  python main.py --copy https://circus-job.com/selections/...\n"
               "Paste: python main.py --paste https://hrmos.co/...",
    )
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(
        "--copy",
        metavar="URL",
        help="Extract the candidate on a Circus selection page and save it.",
    )
    action.add_argument(
        "--paste",
        metavar="URL",
        help="Fill the ATS form at URL with the saved candidate.",
    )
    action.add_argument(
        "--show",
        action="store_true",
        help="Print the saved candidate.",
    )
    action.add_argument(
        "--clear",
        action="store_true",
        help="Clear the saved candidate.",
    )
    action.add_argument(
        "--check-selectors",
        metavar="URL",
        help="Verify ATS mapping selectors against the form at URL.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to config file (default: config.yaml).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    config = load_config(Path(args.config))
    setup_logging(verbose=args.verbose, log_dir=config.history_dir)

    if args.copy:
        ok = asyncio.run(run_copy(config, args.copy))
    elif args.paste:
        ok = asyncio.run(run_paste(config, args.paste))
    elif args.check_selectors:
        asyncio.run(run_check_selectors(config, args.check_selectors))
        ok = True
    elif args.clear:
        asyncio.run(run_clear(config))
        ok = True
    else:
        asyncio.run(run_show(config))
        ok = True
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
