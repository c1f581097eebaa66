# tests/schema/test_model.py
"""
Testes do modelo canônico (SelectOption, FieldSchema, AtlasDataBlock).

Decisões verificadas:
    - Valores de opção são normalizados para texto
    - A comparação de valores brutos com opções usa a forma textual
    - Registros são copiados; o bloco não compartilha estado com o YAML
"""

import pytest

from atlas_datablock.core.errors import BlockValidationError
from atlas_datablock.schema import (
    FieldSchema,
    FieldType,
    SelectOption,
    palette_token,
    validate_block,
    value_key,
)


def test_value_key_normalizes_scalars():
    assert value_key(1) == "1"
    assert value_key(True) == "true"
    assert value_key("done") == "done"
    assert value_key(None) is None


def test_option_from_mapping_and_shorthand():
    full = SelectOption.from_raw({"value": 1, "label": "Um", "color": "blue"})
    short = SelectOption.from_raw("todo")

    assert full == SelectOption(value="1", label="Um", color="blue")
    assert short == SelectOption(value="todo", label="todo")


def test_option_requires_value():
    with pytest.raises(BlockValidationError):
        SelectOption.from_raw({"label": "sem valor"})


def test_unknown_color_falls_back_to_neutral():
    assert palette_token("blue") == "blue"
    assert palette_token("#ff0000") == "gray"
    assert palette_token(None) == "gray"
    assert SelectOption(value="x", label="x", color="magenta").color_token == "gray"


def test_find_option_matches_yaml_scalars():
    field = FieldSchema.from_raw(
        {"key": "level", "type": "select", "options": [{"value": "1", "label": "Low"}, "true"]}
    )

    assert field.find_option(1).label == "Low"
    assert field.find_option(True).value == "true"
    assert field.find_option("missing") is None


def test_field_defaults():
    field = FieldSchema.from_raw({"key": "notes"})

    assert field.type == FieldType.TEXT.value
    assert field.label is None
    assert field.options is None
    assert not field.is_select_like


def test_unknown_field_type_is_kept():
    field = FieldSchema.from_raw({"key": "geo", "type": "location"})

    assert field.type == "location"
    assert field.field_type is None


@pytest.mark.parametrize(
    "raw",
    [
        None,
        [],
        {"data": [{"a": 1}]},
        {"schema": [{"key": "a"}]},
        {"schema": {"key": "a"}, "data": [{"a": 1}]},
        {"schema": [{"key": "a"}], "data": {"a": 1}},
    ],
)
def test_validate_block_rejects_invalid_structure(raw):
    with pytest.raises(BlockValidationError):
        validate_block(raw)


def test_empty_schema_and_data_are_valid():
    block = validate_block({"id": "board", "schema": [], "data": []})

    assert block.id == "board"
    assert block.schema == []
    assert block.data == []


def test_malformed_entries_are_skipped_and_reported(engine_ctx):
    """
    Opção sem `value`, campo sem `key` e registro escalar são ignorados
    individualmente; o restante do bloco sobrevive.
    """
    raw = {
        "id": "board",
        "schema": [
            {"key": "status", "type": "select", "options": [{"label": "Todo"}, {"value": "done"}]},
            {"label": "sem chave"},
            {"key": "score", "type": "number", "min": "zero"},
        ],
        "data": ["solto", {"status": "done"}],
    }

    block = validate_block(raw, position=2, ctx=engine_ctx)

    assert [f.key for f in block.schema] == ["status", "score"]
    assert [o.value for o in block.options_for("status")] == ["done"]
    assert block.get_field("score").min is None
    # o id padrão usa o índice original do registro
    assert [item["id"] for item in block.data] == ["board-2"]

    warnings = engine_ctx.warnings_for("parser")
    assert [w["type"] for w in warnings] == ["BLOCK_ENTRY_SKIPPED"] * 4
    assert [w["details"]["entry"] for w in warnings] == [
        "schema[0].options[0]",
        "schema[1]",
        "schema[2].min",
        "data[0]",
    ]
    assert warnings[0]["details"]["block_id"] == "board"
    assert warnings[0]["details"]["position"] == 2


def test_field_from_raw_is_strict_by_default():
    with pytest.raises(BlockValidationError):
        FieldSchema.from_raw({"key": "status", "options": [{"label": "Todo"}]})
    with pytest.raises(BlockValidationError):
        FieldSchema.from_raw({"key": "status", "options": "todo"})


def test_composite_values_never_match_an_option():
    assert value_key(["a", "b"]) is None
    assert value_key({"a": 1}) is None
    with pytest.raises(BlockValidationError):
        SelectOption.from_raw({"value": ["a"]})


def test_items_are_copied():
    raw = {"schema": [{"key": "tags", "type": "tags"}], "data": [{"tags": ["a"]}]}

    block = validate_block(raw, position=4)
    raw["data"][0]["tags"].append("b")

    assert block.id == "atlas-data-4"
    assert block.type == "generic"
    assert block.data[0]["tags"] == ["a"]


def test_get_field_returns_first_duplicate():
    block = validate_block(
        {"schema": [{"key": "a", "label": "First"}, {"key": "a", "label": "Second"}], "data": [{"a": 1}]}
    )

    assert block.get_field("a").label == "First"
    assert block.get_field("missing") is None
    assert block.options_for("a") == []


def test_to_dict_round_trips_hints(tasks_block):
    out = tasks_block.to_dict()

    assert out["id"] == "tasks"
    assert out["group_by"] == "status"
    assert out["swimlane_by"] == "priority"
    assert out["schema"][1]["options"][0] == {"value": "todo", "label": "To do", "color": "gray", "icon": None}
