"""load_yaml 测试"""

from __future__ import annotations

import pytest
import yaml

from scraper.utils import yaml_io
from scraper.utils.yaml_io import load_yaml


def test_missing_file(tmp_path) -> None:
    assert load_yaml(tmp_path / "none.yml") == {}


def test_empty_and_non_dict(tmp_path) -> None:
    empty = tmp_path / "empty.yml"
    empty.write_text("", encoding="utf-8")
    listing = tmp_path / "list.yml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    assert load_yaml(empty) == {}
    assert load_yaml(listing) == {}


def test_parse_error(tmp_path) -> None:
    bad = tmp_path / "bad.yml"
    bad.write_text("a: [1, 2\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_yaml(bad)


def test_size_limit(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(yaml_io, "MAX_YAML_SIZE", 4)
    big = tmp_path / "big.yml"
    big.write_text("key: value\n", encoding="utf-8")
    with pytest.raises(ValueError, match="过大"):
        load_yaml(big)
