# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas DataBlock.

Garantem apenas que o pacote importa sem ciclos e que a API pública de
ponta a ponta (texto → bloco → view) está disponível.

Limites explícitos:
    - Não testar regras de domínio (ver tests/parser, tests/values, tests/views)
"""

import atlas_datablock
from atlas_datablock import views


def test_public_api_is_importable():
    for name in atlas_datablock.__all__:
        assert hasattr(atlas_datablock, name)


def test_text_to_view_round(tasks_document):
    block = atlas_datablock.parse_first_block(tasks_document)

    assert block.id == "tasks"
    assert [c.id for c in views.kanban_columns(block)] == ["todo", "doing", "done"]
