"""Load the YAML configuration file and .env overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from circus_copier import selectors
from circus_copier.mappings import default_ats_mappings, load_mappings_file
from circus_copier.models import ATSMapping


@dataclass
class BrowserSettings:
    user_data_dir: str = "browser_data"
    headless: bool = False
    slow_mo: int = 50


@dataclass
class Config:
    storage_path: Path = Path("data/storage.json")
    history_dir: Path = Path("data")
    circus_url_marker: str = selectors.CIRCUS_URL_MARKER
    browser: BrowserSettings = field(default_factory=BrowserSettings)
    mappings_file: Path | None = None
    ats_mappings: list[ATSMapping] = field(default_factory=default_ats_mappings)


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(config_path: Path) -> Config:
    """Load config.yaml (optional) and .env, return Config.

    Every setting has a default, so a missing config file is not an error.
    A mappings_file that is set but missing is.
    """
    load_dotenv()

    raw: dict = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config root must be a mapping: {config_path}")

    settings = raw.get("settings", {})
    brow = raw.get("browser", {})

    browser = BrowserSettings(
        user_data_dir=brow.get("user_data_dir", "browser_data"),
        headless=brow.get("headless", False),
        slow_mo=brow.get("slow_mo", 50),
    )

    storage_path = Path(settings.get("storage_path", "data/storage.json"))
    history_dir = Path(settings.get("history_dir", "data"))

    # Environment wins over the file
    if os.getenv("CIRCUS_COPIER_STORAGE"):
        storage_path = Path(os.environ["CIRCUS_COPIER_STORAGE"])
    if os.getenv("CIRCUS_COPIER_HEADLESS"):
        browser.headless = _env_bool(os.environ["CIRCUS_COPIER_HEADLESS"])

    mappings_file = raw.get("mappings_file")
    if mappings_file:
        mappings_file = Path(mappings_file)
        ats_mappings = load_mappings_file(mappings_file)
    else:
        ats_mappings = default_ats_mappings()

    return Config(
        storage_path=storage_path,
        history_dir=history_dir,
        circus_url_marker=settings.get("circus_url_marker", selectors.CIRCUS_URL_MARKER),
        browser=browser,
        mappings_file=mappings_file,
        ats_mappings=ats_mappings,
    )
