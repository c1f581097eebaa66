# src/atlas_datablock/__init__.py
"""
Atlas DataBlock — engine de blocos de dados tipados embutidos em documentos.

Um documento pode conter blocos cercados por ```atlas-data com um `schema`
(campos tipados) e `data` (registros). O engine decodifica esses blocos em
um modelo canônico único e o transforma em sete views estruturais: lista,
kanban, calendário, timeline, árvore, grafo e galeria.

Princípios centrais:
    - Uma única fonte de dados (o bloco) alimenta todas as views
    - Parsing tolerante: uma ocorrência corrompida não afeta as demais
    - Transformações puras e determinísticas, sem estado entre chamadas
    - Descartes são explícitos e inspecionáveis via `EngineContext`

Arquitetura em alto nível:
    - core    → configuração, contexto, diagnósticos, erros e hashing
    - schema  → modelo canônico, rótulos e inferência de tipos
    - parser  → extração e validação de blocos no texto
    - values  → datas em horário local, locales e valor de exibição
    - views   → os sete transformadores

Limites explícitos:
    - Não persiste nem reescreve documentos
    - Não renderiza (HTML/pixels ficam com a camada de apresentação)
"""

from .core.config.settings import EngineConfig
from .core.context import EngineContext
from .core.errors import BlockDecodeError, BlockValidationError, DataBlockError
from .parser import parse_block_by_id, parse_blocks, parse_blocks_by_type, parse_first_block
from .schema import AtlasDataBlock, FieldSchema, SelectOption
from .values.resolver import FieldValue, resolve_display_value, resolve_item

__all__ = [
    "AtlasDataBlock",
    "BlockDecodeError",
    "BlockValidationError",
    "DataBlockError",
    "EngineConfig",
    "EngineContext",
    "FieldSchema",
    "FieldValue",
    "SelectOption",
    "parse_block_by_id",
    "parse_blocks",
    "parse_blocks_by_type",
    "parse_first_block",
    "resolve_display_value",
    "resolve_item",
]
