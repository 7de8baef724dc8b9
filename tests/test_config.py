"""Tests for configuration and resource loading."""

import tempfile
from datetime import date
from pathlib import Path

import pytest

from newsthreads.config import load_config, reference_date
from newsthreads.errors import ConfigError
from newsthreads.models import Language
from newsthreads.resources import (
    BUILTIN_MONTH_NAMES,
    load_resources,
    read_tagged_vocabulary,
    read_term_clusters,
)


def test_packaged_defaults():
    cfg = load_config()
    assert cfg["languages"] == ["en", "ru"]
    assert cfg["detection"] == {"num_samples": 300, "min_score": 0.1}
    assert Path(cfg["resources"]["en"]["frequency_vocab"]).is_absolute()


def test_file_overrides_and_resolves_paths():
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg_file = Path(tmpdir) / "config.yaml"
        cfg_file.write_text(
            f"assets_path: {tmpdir}\n"
            "freshness_days: 7\n"
            "clustering:\n  eps: 3.5\n"
            "resources:\n  en:\n    categories: cats.txt\n"
        )
        cfg = load_config(cfg_file)
        assert cfg["freshness_days"] == 7
        assert cfg["clustering"] == {"eps": 3.5, "minpts": 2}
        assert cfg["resources"]["en"]["categories"] == str((Path(tmpdir) / "cats.txt").resolve())
        assert cfg["resources"]["en"]["date_masks"][0] == "MDY"


def test_missing_config_file_uses_defaults(caplog):
    cfg = load_config("/nonexistent/config.yaml")
    assert cfg["clustering"] == {"eps": 16.0, "minpts": 2}
    assert "Cannot read config" in caplog.text


def test_malformed_config_file_uses_defaults(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        bad = Path(tmpdir) / "config.yaml"
        bad.write_text("clustering: [unclosed\n")
        cfg = load_config(bad)
        assert cfg["clustering"]["eps"] == 16.0
        assert cfg["freshness_days"] == 30
        assert "Cannot read config" in caplog.text


def test_non_mapping_config_uses_defaults(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        bad = Path(tmpdir) / "config.yaml"
        bad.write_text("- just\n- a list\n")
        cfg = load_config(bad)
        assert cfg["languages"] == ["en", "ru"]
        assert "must be a mapping" in caplog.text


def test_relative_assets_resolve_against_config_dir(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir, tempfile.TemporaryDirectory() as elsewhere:
        monkeypatch.chdir(elsewhere)
        cfg_file = Path(tmpdir) / "config.yaml"
        cfg_file.write_text("assets_path: assets\nresources:\n  en:\n    categories: cats.txt\n")
        cfg = load_config(cfg_file)
        expected = (Path(tmpdir) / "assets").resolve()
        assert cfg["assets_path"] == str(expected)
        assert cfg["resources"]["en"]["categories"] == str(expected / "cats.txt")


def test_bad_workers_env(monkeypatch):
    monkeypatch.setenv("NEWSTHREADS_WORKERS", "many")
    with pytest.raises(ConfigError):
        load_config()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("NEWSTHREADS_TODAY", "2024-03-01")
    monkeypatch.setenv("NEWSTHREADS_WORKERS", "3")
    cfg = load_config()
    assert reference_date(cfg) == date(2024, 3, 1)
    assert cfg["workers"] == 3


def test_bad_today():
    with pytest.raises(ConfigError):
        reference_date({"today": "yesterday"})
    assert reference_date({"today": None}) == date.today()


def test_tagged_vocabulary_cycles():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "months.voc"
        path.write_text("\n".join(["January", "February"] + [f"m{i}" for i in range(3, 13)] + ["jan", "feb"]))
        months = read_tagged_vocabulary(path, 1, 12)
        assert months["january"] == 1
        assert months["m12"] == 12
        assert months["jan"] == 1
        assert months["feb"] == 2


def test_term_clusters():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "clusters.txt"
        path.write_text("3 2\nelection 0\nfootball 1\nbroken 7\n")
        table, num_clusters = read_term_clusters(path)
        assert num_clusters == 2
        assert table == {"election": 0, "football": 1}


def test_missing_files_fall_back_to_builtins():
    cfg = load_config()
    for lang_cfg in cfg["resources"].values():
        for key in ("frequency_vocab", "month_names", "embedding_table", "categories"):
            lang_cfg[key] = f"/nonexistent/{key}"
    resources = load_resources(cfg)
    en = resources[Language.ENGLISH]
    assert en.month_names == BUILTIN_MONTH_NAMES[Language.ENGLISH]
    assert "the" in en.frequency_vocab
    assert not en.has_embeddings
    assert en.categories == []
