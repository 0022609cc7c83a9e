# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from site_walker.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seeds: [http://example.com/]\nconcurrency: 5", ".yaml", None),
        (json.dumps({"seeds": ["http://example.com/"], "concurrency": 5}), ".json", None),
        ("concurrency: 0", ".yaml", ValidationError),
        ("unknown_key: 1", ".yml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("seeds = []", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.seeds == ["http://example.com/"]
        assert cfg.concurrency == 5


def test_defaults():
    cfg = CrawlerConfig()
    assert cfg.seeds == []
    assert cfg.concurrency == 20
    assert cfg.retry_times == 0
    assert cfg.max_urls is None
    assert cfg.max_depth is None


def test_load_config_default_missing_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlerConfig()


def test_load_config_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("concurrency: 3\n", encoding="utf-8")
    assert load_config(None).concurrency == 3


def test_explicit_path_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_seeds_string_is_split():
    cfg = CrawlerConfig(seeds="http://a/ http://b/")
    assert cfg.seeds == ["http://a/", "http://b/"]


def test_with_overrides_skips_none_and_validates():
    cfg = CrawlerConfig(concurrency=4)
    assert cfg.with_overrides(concurrency=None) is cfg
    assert cfg.with_overrides(max_urls=10).max_urls == 10
    with pytest.raises(ValidationError):
        cfg.with_overrides(concurrency=0)


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.concurrency = 3
