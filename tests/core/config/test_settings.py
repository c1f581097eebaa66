# tests/core/config/test_settings.py
"""Testes da visão tipada `EngineConfig`."""

import pytest

from atlas_datablock.core.config.errors import InvalidConfigRootTypeError, UnknownLocaleError
from atlas_datablock.core.config.settings import EngineConfig, get_default_config, resolve_config


def test_defaults_materialize():
    cfg = EngineConfig.from_dict()

    assert cfg.fence_tag == "atlas-data"
    assert cfg.locale == "zh-CN"
    assert cfg.empty_token == "—"
    assert cfg.object_marker == "__object__"
    assert cfg.kanban_group_field == "status"
    assert cfg.kanban_swimlane_field == "priority"
    assert cfg.calendar_date_field == "start_date"
    assert cfg.timeline_date_field == "date"
    assert cfg.timeline_per_row == 4
    assert cfg.gallery_cover_field == "cover"


def test_locale_derived_tokens():
    cfg = EngineConfig.from_dict({"display": {"locale": "en-US"}})

    assert cfg.currency_code == "USD"
    assert cfg.untitled == "Untitled"
    assert cfg.uncategorized == "Uncategorized"


def test_explicit_tokens_win_over_locale():
    cfg = EngineConfig.from_dict(
        {"display": {"currency": "EUR", "untitled_token": "(sem nome)", "uncategorized_token": "Outros"}}
    )

    assert cfg.currency_code == "EUR"
    assert cfg.untitled == "(sem nome)"
    assert cfg.uncategorized == "Outros"


def test_unknown_locale_raises():
    with pytest.raises(UnknownLocaleError):
        EngineConfig.from_dict({"display": {"locale": "xx-XX"}})


def test_section_must_be_mapping():
    with pytest.raises(InvalidConfigRootTypeError):
        EngineConfig.from_dict({"views": {"calendar": ["start_date"]}})


def test_resolve_config_prefers_explicit():
    explicit = EngineConfig.from_dict({"display": {"locale": "pt-BR"}})

    assert resolve_config(explicit) is explicit
    assert resolve_config(None) is get_default_config()
