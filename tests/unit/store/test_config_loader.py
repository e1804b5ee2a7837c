import json
import sys

import pytest

from rolegate.core.model import Effect
from rolegate.store.config_loader import FileConfigSource, load_config, parse_config_text


def test_json_by_extension():
    assert parse_config_text('{"roles": {}}', filename="acl.json") == {"roles": {}}


def test_json_fallback_without_hints():
    assert parse_config_text('{"default": "allow"}') == {"default": "allow"}


def test_content_type_json_wins_over_extension():
    assert parse_config_text("{}", content_type="application/json; charset=utf-8", filename="acl.yaml") == {}


def test_yaml_by_extension():
    pytest.importorskip("yaml")
    doc = parse_config_text("roles:\n  guest: []\n  admin: [guest]\n", filename="acl.yml")
    assert doc == {"roles": {"guest": [], "admin": ["guest"]}}


def test_yaml_by_content_type():
    pytest.importorskip("yaml")
    assert parse_config_text("default: allow\n", content_type="application/x-yaml") == {"default": "allow"}


def test_empty_yaml_is_an_empty_document():
    pytest.importorskip("yaml")
    assert parse_config_text("", filename="acl.yaml") == {}


def test_yaml_requires_pyyaml(monkeypatch):
    monkeypatch.setitem(sys.modules, "yaml", None)
    with pytest.raises(ImportError):
        parse_config_text("roles: {}\n", filename="acl.yaml")


def test_top_level_must_be_mapping():
    with pytest.raises(ValueError):
        parse_config_text("[1, 2]", filename="acl.json")


def test_invalid_json_raises():
    with pytest.raises(json.JSONDecodeError):
        parse_config_text("not json", filename="acl.json")


def test_file_source_etag_and_load(tmp_path):
    p = tmp_path / "acl.json"
    src = FileConfigSource(str(p))
    assert src.etag() is None

    p.write_text(json.dumps({"roles": {"guest": []}}), encoding="utf-8")
    first = src.etag()
    assert first is not None and len(first) == 64
    assert src.etag() == first
    assert src.load() == {"roles": {"guest": []}}

    p.write_text(json.dumps({"roles": {"guest": [], "admin": ["guest"]}}), encoding="utf-8")
    assert src.etag() != first


def test_load_config_returns_access_config(tmp_path):
    p = tmp_path / "acl.json"
    p.write_text(
        json.dumps({"default": "allow", "roles": {"guest": []}, "resources": {"shop": ["view"]}}),
        encoding="utf-8",
    )
    cfg = load_config(str(p))
    assert cfg.default is Effect.ALLOW
    assert list(cfg.resources["shop"]) == ["view"]
