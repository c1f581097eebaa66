# tests/values/test_resolver.py
"""
Testes do DisplayValueResolver.

Este módulo valida que:
- todo par (FieldSchema, valor) produz uma string, nunca uma exceção
- vazios resultam no token de vazio para qualquer tipo
- select/status resolvem a SelectOption correspondente
- datas, moeda e números seguem o locale configurado
- o resolver é puro: o mesmo par sempre produz o mesmo resultado

Decisões arquiteturais:
    - Tempo relativo exige `now` explícito
    - Mapeamentos em campos não estruturados viram o marcador de objeto
"""

from datetime import datetime

import pytest

from atlas_datablock.core.config.settings import EngineConfig
from atlas_datablock.schema import FieldSchema, FieldType, MappingLabelResolver, SelectOption
from atlas_datablock.values.resolver import (
    format_currency,
    format_relative_time,
    resolve_display_value,
    resolve_item,
    resolve_item_map,
    split_tags,
)
from atlas_datablock.values.locales import EN_US, PT_BR, ZH_CN

EN = EngineConfig.from_dict({"display": {"locale": "en-US"}})
PT = EngineConfig.from_dict({"display": {"locale": "pt-BR"}})

STATUS = FieldSchema(
    key="status",
    label="Status",
    type="status",
    options=[SelectOption(value="done", label="Done", color="green")],
)


def _display(ftype, raw, **kwargs):
    return resolve_display_value(FieldSchema(key="f", type=ftype, **kwargs), raw).display_value


@pytest.mark.parametrize("ftype", [t.value for t in FieldType] + ["unknown-kind"])
@pytest.mark.parametrize("raw", [None, "", 0, -1.5, "texto", True, [1, "a"], {"k": "v"}, "2025-06-15", "nan"])
def test_resolver_is_total(ftype, raw):
    """
    O resolver é total: qualquer tipo × qualquer valor resulta em string.

    Invariantes:
        - Nenhuma exceção é propagada
        - O valor bruto é preservado em `FieldValue.value`
    """
    fv = resolve_display_value(FieldSchema(key="f", type=ftype), raw)

    assert isinstance(fv.display_value, str)
    assert fv.value is raw


@pytest.mark.parametrize("ftype", ["text", "number", "date", "select", "currency", "tags"])
def test_empty_values_use_empty_token(ftype):
    assert _display(ftype, None) == "—"
    assert _display(ftype, "") == "—"


def test_empty_token_is_configurable():
    cfg = EngineConfig.from_dict({"display": {"empty_token": "n/a"}})

    assert resolve_display_value(FieldSchema(key="f"), None, config=cfg).display_value == "n/a"


def test_select_resolves_option():
    fv = resolve_display_value(STATUS, "done")

    assert fv.display_value == "Done"
    assert fv.option.color == "green"
    assert fv.options == list(STATUS.options)


def test_select_without_match_shows_raw_value():
    fv = resolve_display_value(STATUS, "archived")

    assert fv.display_value == "archived"
    assert fv.option is None


def test_multi_select_joins_labels():
    field = FieldSchema(
        key="langs",
        type="multi-select",
        options=[SelectOption(value="py", label="Python"), SelectOption(value="go", label="Go")],
    )

    assert resolve_display_value(field, ["py", "rust"]).display_value == "Python, rust"
    assert resolve_display_value(field, "go, py").display_value == "Go, Python"


def test_dates_use_local_long_format():
    assert _display("date", "2025-06-15") == "2025年6月15日"
    assert _display("datetime", "2025-06-15T09:05:00") == "2025年6月15日 09:05"
    assert _display("date", "someday") == "someday"

    field = FieldSchema(key="d", type="date")
    assert resolve_display_value(field, "2025-06-15", config=EN).display_value == "June 15, 2025"
    assert resolve_display_value(field, "2025-06-15", config=PT).display_value == "15 de junho de 2025"


def test_currency_formatting():
    assert format_currency(1234.5, ZH_CN, "CNY") == "¥1,234.50"
    assert format_currency(1234.5, EN_US, "USD") == "$1,234.50"
    assert format_currency(1234.5, PT_BR, "BRL") == "R$ 1.234,50"
    assert format_currency(-12, ZH_CN, "CNY") == "-¥12.00"
    assert format_currency(1234.5, ZH_CN, "JPY") == "¥1,235"
    assert format_currency(5, EN_US, "XYZ") == "XYZ 5.00"
    assert format_currency("abc", EN_US, "USD") == "abc"


def test_currency_field_uses_field_code_or_locale_default():
    assert _display("currency", 10) == "¥10.00"
    assert _display("currency", 10, currency="EUR") == "€10.00"
    assert resolve_display_value(FieldSchema(key="c", type="currency"), 10, config=EN).display_value == "$10.00"


def test_number_grouping():
    assert _display("number", 1234567.891) == "1,234,567.891"
    assert _display("number", 2.50) == "2.5"
    assert _display("number", 42) == "42"
    assert resolve_display_value(FieldSchema(key="n", type="number"), 1234.5, config=PT).display_value == "1.234,5"


def test_boolean_tokens():
    assert _display("boolean", True) == "是"
    assert _display("toggle", False) == "否"
    assert resolve_display_value(FieldSchema(key="b", type="boolean"), True, config=EN).display_value == "Yes"


def test_tags_normalization():
    assert split_tags(["a", None, "b"]) == ["a", "b"]
    assert split_tags('["x", "y"]') == ["x", "y"]
    assert split_tags("a, b ,, c") == ["a", "b", "c"]
    assert split_tags("[broken") == ["[broken"]
    assert _display("tags", ["design", "ux"]) == "design, ux"


def test_mapping_values_use_object_marker():
    assert _display("text", {"nested": True}) == "__object__"


def test_label_resolution_in_field_value():
    resolver = MappingLabelResolver(labels={"f": "Registered"})

    assert resolve_display_value(FieldSchema(key="f"), "x", labels=resolver).label == "Registered"
    assert resolve_display_value(FieldSchema(key="f", label="Own"), "x", labels=resolver).label == "Own"


def test_resolver_does_not_mutate_raw():
    raw = ["b", "a"]

    resolve_display_value(FieldSchema(key="t", type="tags"), raw)

    assert raw == ["b", "a"]


def test_resolve_item_follows_schema_order(tasks_block):
    item = tasks_block.data[0]

    values = resolve_item(tasks_block, item)

    assert [v.key for v in values] == ["title", "status", "priority", "estimate", "notes"]
    assert resolve_item_map(tasks_block, item) == {
        "title": "Login page",
        "status": "To do",
        "priority": "High",
        "estimate": "3",
        "notes": "—",
    }


def test_relative_time():
    now = datetime(2025, 6, 15, 12, 0)

    assert format_relative_time("2025-06-13T12:00:00", now=now) == "2 天前"
    assert format_relative_time("2025-06-15T09:00:00", now=now) == "3 小时前"
    assert format_relative_time("2025-06-15T11:50:00", now=now) == "10 分钟前"
    assert format_relative_time("2025-06-15T11:59:30", now=now) == "刚刚"
    assert format_relative_time("2025-04-01", now=now) == "2025/04/01"
    assert format_relative_time("2025-06-14T12:00:00", now=now, config=EN) == "1 days ago"
    assert format_relative_time(None, now=now) == "—"
    assert format_relative_time("whenever", now=now) == "whenever"
