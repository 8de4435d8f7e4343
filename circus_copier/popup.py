"""Terminal status view: the copied candidate, the current page, and results.

Mirrors what the browser extension's popup showed, printed with ANSI colors.
"""

from __future__ import annotations

from circus_copier.models import CandidateData, FillResult, PageInfo

# ANSI color helpers
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[91m"
GREEN = "\033[92m"
BLUE = "\033[94m"
CYAN = "\033[96m"
RESET = "\033[0m"

NOT_COPIED = "まだコピーされていません"


def candidate_lines(candidate: CandidateData | None) -> list[str]:
    """Plain-text summary of the stored candidate, one line per row."""
    if not candidate:
        return [NOT_COPIED]

    kana_line = f"{candidate.last_name_kana} {candidate.first_name_kana} / {candidate.gender}"
    if candidate.age:
        kana_line += f" / {candidate.age}歳"

    return [
        f"{candidate.last_name} {candidate.first_name}",
        kana_line,
        f"居住地: {candidate.residence}",
        f"電話: {candidate.phone}",
        f"メール: {candidate.email}",
        f"コピー日時: {candidate.copied_at_display}",
    ]


def page_status_line(info: PageInfo) -> str:
    if info.is_circus_page:
        return "Circus 候補者ページ → コピー可能"
    if info.is_ats_page:
        return f"{info.ats_name} → 貼り付け可能"
    return "対応ページではありません"


def fill_message(result: FillResult) -> str:
    if result.success:
        return f"{result.filled_count}/{result.total_count}項目を入力しました！"
    return "貼り付けに失敗しました。ページを確認してください。"


class StatusView:
    """Prints the copier's state and toast-style messages to the terminal."""

    def show_candidate(self, candidate: CandidateData | None) -> None:
        print(f"\n{BOLD}{CYAN}コピー済み候補者{RESET}")
        print(f"{'-' * 40}")
        lines = candidate_lines(candidate)
        if not candidate:
            print(f"{DIM}{lines[0]}{RESET}")
            return
        print(f"{BOLD}{lines[0]}{RESET}")
        for line in lines[1:-1]:
            print(f"  {line}")
        print(f"  {DIM}{lines[-1]}{RESET}")

    def show_page(self, info: PageInfo) -> None:
        print(f"\n{BOLD}{CYAN}現在のページ{RESET}")
        print(f"{'-' * 40}")
        line = page_status_line(info)
        if info.is_circus_page:
            print(f"{GREEN}{line}{RESET}")
        elif info.is_ats_page:
            print(f"{BLUE}{line}{RESET}")
        else:
            print(f"{DIM}{line}{RESET}")
        print(f"  {DIM}{info.url}{RESET}")

    def success(self, text: str) -> None:
        print(f"\n{BOLD}{GREEN}{text}{RESET}")

    def error(self, text: str) -> None:
        print(f"\n{BOLD}{RED}{text}{RESET}")

    def show_fill_result(self, result: FillResult) -> None:
        if result.success:
            self.success(fill_message(result))
        else:
            self.error(fill_message(result))
        for selector in result.skipped_selectors:
            print(f"  {DIM}skipped: {selector}{RESET}")
