"""Configuration management for newsthreads."""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

PACKAGED_CONFIG = Path(__file__).parent / "config.yaml"

DEFAULT_CONFIG = {
    "assets_path": "assets",
    "languages": ["en", "ru"],
    "today": None,
    "workers": None,
    "min_word_size": 1,
    "detection": {"num_samples": 300, "min_score": 0.1},
    "freshness_days": 30,
    "clustering": {"eps": 16.0, "minpts": 2},
    "entities": {"top_n": 5},
    "resources": {
        "en": {
            "frequency_vocab": "vocabs/top_english_words.voc",
            "day_names": "vocabs/english_day_names.voc",
            "month_names": "vocabs/english_month_names.voc",
            "embedding_table": "embeddings/english_clusters.txt",
            "lemma_table": None,
            "lemma_suffix": "",
            "categories": "categories/english_categories.txt",
            "category_thresholds": {},
            "default_category_threshold": 0.1,
            "date_masks": ["MDY", "YMD", "DMY", "YDM", "MDX", "XMD", "DMX", "XDM"],
        },
        "ru": {
            "frequency_vocab": "vocabs/top_russian_words.voc",
            "day_names": "vocabs/russian_day_names.voc",
            "month_names": "vocabs/russian_month_names.voc",
            "embedding_table": "embeddings/russian_clusters.txt",
            "lemma_table": "vocabs/russian_lemmas.txt",
            "lemma_suffix": "_NOUN",
            "categories": "categories/russian_categories.txt",
            "category_thresholds": {},
            "default_category_threshold": 0.1,
            "date_masks": ["DMY", "YMD", "YDM", "DMX", "XDM"],
        },
    },
}

_RESOURCE_FILE_KEYS = ("frequency_vocab", "day_names", "month_names",
                       "embedding_table", "lemma_table", "categories")


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration, merging defaults with file and env vars.

    Without an explicit path the packaged config.yaml is used. A config file
    that is missing or unreadable is reported and the built-in defaults are
    used instead. Resource paths are resolved against ``assets_path``; a
    relative ``assets_path`` is taken from the directory of an explicitly
    given config file, otherwise from the working directory.
    """
    cfg = _copy(DEFAULT_CONFIG)
    base_dir = Path.cwd()

    path = Path(config_path).expanduser() if config_path else PACKAGED_CONFIG
    file_cfg = _read_config_file(path) if config_path or path.exists() else None
    if file_cfg is not None:
        _deep_merge(cfg, file_cfg)
        if config_path:
            base_dir = path.resolve().parent

    # Env overrides
    if today := os.environ.get("NEWSTHREADS_TODAY"):
        cfg["today"] = today
    if workers := os.environ.get("NEWSTHREADS_WORKERS"):
        try:
            cfg["workers"] = int(workers)
        except ValueError as e:
            raise ConfigError(f"NEWSTHREADS_WORKERS must be an integer, got {workers!r}") from e

    # Expand paths
    assets = base_dir / Path(cfg["assets_path"]).expanduser()
    cfg["assets_path"] = str(assets.resolve())
    for lang_cfg in cfg["resources"].values():
        for key in _RESOURCE_FILE_KEYS:
            if lang_cfg.get(key):
                lang_cfg[key] = str((assets / Path(lang_cfg[key]).expanduser()).resolve())

    return cfg


def _read_config_file(path: Path) -> dict | None:
    """Parse a YAML config file; None (with a warning) when it can't be used."""
    try:
        with open(path, encoding="utf-8") as f:
            file_cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Cannot read config {path}, using defaults: {e}")
        return None
    if not isinstance(file_cfg, dict):
        logger.warning(f"Config {path} must be a mapping, got {type(file_cfg).__name__}; using defaults")
        return None
    return file_cfg


def reference_date(config: dict[str, Any]) -> date:
    """The date freshness is measured against: config ``today`` or the real today."""
    today = config.get("today")
    if today is None:
        return date.today()
    if isinstance(today, date):
        return today
    try:
        return date.fromisoformat(str(today))
    except ValueError as e:
        raise ConfigError(f"'today' must be an ISO date (YYYY-MM-DD), got {today!r}") from e


def _copy(value: Any) -> Any:
    """Deep copy of plain dict/list config values."""
    if isinstance(value, dict):
        return {k: _copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy(v) for v in value]
    return value


def _deep_merge(base: dict, override: dict) -> None:
    """Merge override into base in-place."""
    for k, v in override.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
