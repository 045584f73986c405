# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from check_pages.config import DEFAULT_USER_AGENT, RunConfiguration, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults():
    cfg = RunConfiguration(page_urls=["http://example.com/"])
    assert cfg.check_links is False
    assert cfg.summary is False
    assert cfg.links_to_ignore == []
    assert cfg.max_response_time is None
    assert cfg.user_agent == DEFAULT_USER_AGENT
    assert cfg.retry_times == 0


def test_camel_case_names_are_accepted():
    cfg = RunConfiguration.model_validate(
        {"pageUrls": ["page.html"], "checkLinks": True, "linksToIgnore": ["x"], "maxResponseTime": 200}
    )
    assert cfg.page_urls == ["file:page.html"]
    assert cfg.check_links is True
    assert cfg.links_to_ignore == ["x"]
    assert cfg.max_response_time == 200


def test_configuration_is_frozen():
    cfg = RunConfiguration(page_urls=[])
    with pytest.raises(ValidationError):
        cfg.check_links = True


@pytest.mark.parametrize(
    "options",
    [
        {},
        {"page_urls": "string"},
        {"page_urls": [], "links_to_ignore": "string"},
        {"page_urls": [], "max_response_time": "string"},
        {"page_urls": [], "max_response_time": -5},
        {"page_urls": [], "user_agent": 5},
        {"page_urls": [], "unknown_option": True},
        {"page_urls": [], "check_links": "maybe"},
    ],
)
def test_invalid_options(options):
    with pytest.raises(ValidationError):
        RunConfiguration.model_validate(options)


@pytest.mark.parametrize("value", [None, ""])
def test_user_agent_can_be_disabled(value):
    assert RunConfiguration(page_urls=[], user_agent=value).user_agent is None


def test_zero_response_time_means_unset():
    assert RunConfiguration(page_urls=[], max_response_time=0).max_response_time is None


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("pageUrls: ['http://example.com/']\ncheckLinks: true", ".yaml", None),
        (json.dumps({"page_urls": ["http://example.com/"], "check_links": True}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- a\n- b", ".yml", TypeError),
        ("pageUrls = []", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert cfg.page_urls == ["http://example.com/"]
        assert cfg.check_links is True


def test_load_config_overrides(tmp_path):
    cfg_path = write_file(tmp_path, "pageUrls: [a.html]\nsummary: false", ".yaml")
    cfg = load_config(cfg_path, summary=True, page_urls=None, timeout=5)
    assert cfg.page_urls == ["file:a.html"]
    assert cfg.summary is True
    assert cfg.timeout == 5


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")
