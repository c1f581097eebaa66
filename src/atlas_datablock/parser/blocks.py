"""
Parser canônico de blocos `atlas-data`.

Varre o texto bruto de um documento à procura de blocos cercados por
```` ```atlas-data ```` ... ```` ``` ```` e decodifica o conteúdo de cada um como
YAML.

Tolerância a falha parcial:
    - Ocorrência com YAML inválido → descartada
    - Ocorrência sem `schema`/`data` em forma de lista → descartada
      (listas vazias são válidas)
    - Opção, campo ou registro malformado → apenas a entrada é ignorada;
      o bloco é mantido
    - Um bloco corrompido nunca aborta a extração dos demais

Descartes nunca levantam exceção; quando um `EngineContext` é fornecido,
cada descarte é registrado como warning estruturado (estágio `parser`).

A ordem dos blocos retornados é a ordem de aparição no texto.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Pattern

import yaml

from atlas_datablock.core.config.settings import EngineConfig, resolve_config
from atlas_datablock.core.context import EngineContext, report
from atlas_datablock.core.diagnostics import block_decode_failed, block_invalid_structure
from atlas_datablock.core.errors import BlockDecodeError, BlockValidationError
from atlas_datablock.schema.model import AtlasDataBlock, validate_block

STAGE = "parser"


def block_pattern(fence_tag: str) -> Pattern[str]:
    return re.compile(r"```" + re.escape(fence_tag) + r"[ \t]*\r?\n([\s\S]*?)```")


def decode_block(body: str) -> Any:
    """
    Decodifica o corpo de uma ocorrência.

    Raises:
        BlockDecodeError: se o YAML for inválido.
    """
    try:
        return yaml.safe_load(body.strip())
    except yaml.YAMLError as e:
        raise BlockDecodeError(str(e) or "failed to decode atlas-data block") from e


def parse_blocks(
    text: str,
    *,
    config: Optional[EngineConfig] = None,
    ctx: Optional[EngineContext] = None,
) -> List[AtlasDataBlock]:
    """Extrai todos os blocos válidos de um documento, na ordem de aparição."""
    cfg = resolve_config(config)
    blocks: List[AtlasDataBlock] = []
    if not text:
        return blocks

    for position, match in enumerate(block_pattern(cfg.fence_tag).finditer(text), start=1):
        try:
            decoded = decode_block(match.group(1))
        except BlockDecodeError as e:
            report(ctx, stage=STAGE, payload=block_decode_failed(position=position, reason=str(e)))
            continue

        try:
            block = validate_block(decoded, position=position, ctx=ctx)
        except BlockValidationError as e:
            raw_id = decoded.get("id") if isinstance(decoded, dict) else None
            report(
                ctx,
                stage=STAGE,
                payload=block_invalid_structure(
                    position=position,
                    reason=str(e),
                    block_id=str(raw_id) if raw_id is not None else None,
                ),
            )
            continue

        blocks.append(block)

    if ctx is not None:
        ctx.log(stage=STAGE, level="INFO", message="atlas-data blocks parsed", count=len(blocks))
    return blocks


def parse_first_block(
    text: str,
    *,
    config: Optional[EngineConfig] = None,
    ctx: Optional[EngineContext] = None,
) -> Optional[AtlasDataBlock]:
    blocks = parse_blocks(text, config=config, ctx=ctx)
    return blocks[0] if blocks else None


def parse_block_by_id(
    text: str,
    block_id: str,
    *,
    config: Optional[EngineConfig] = None,
    ctx: Optional[EngineContext] = None,
) -> Optional[AtlasDataBlock]:
    """Primeiro bloco com o `id` informado (ids duplicados: o primeiro vence)."""
    for block in parse_blocks(text, config=config, ctx=ctx):
        if block.id == block_id:
            return block
    return None


def parse_blocks_by_type(
    text: str,
    block_type: str,
    *,
    config: Optional[EngineConfig] = None,
    ctx: Optional[EngineContext] = None,
) -> List[AtlasDataBlock]:
    return [b for b in parse_blocks(text, config=config, ctx=ctx) if b.type == block_type]
