"""
Atlas DataBlock — Diagnósticos canônicos (v1)

Este módulo define o payload estruturado usado para reportar descartes e
degradações locais do engine (ocorrências ignoradas pelo parser, itens sem
data, itens fora das colunas de um kanban).

Diagnósticos nunca interrompem a transformação. Eles existem para que o
chamador possa inspecionar, de forma serializável, o que foi descartado.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiagnosticPayload:
    """
    Payload canônico de diagnóstico.

    Campos:
    - type: código estável do diagnóstico (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao autor do documento
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do diagnóstico."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos (v1)
# ---------------------------------------------------------------------------

# Parser
BLOCK_DECODE_FAILED = "BLOCK_DECODE_FAILED"
BLOCK_INVALID_STRUCTURE = "BLOCK_INVALID_STRUCTURE"
BLOCK_ENTRY_SKIPPED = "BLOCK_ENTRY_SKIPPED"

# Views
ITEM_DATE_UNPARSEABLE = "ITEM_DATE_UNPARSEABLE"
ITEM_GROUP_UNMATCHED = "ITEM_GROUP_UNMATCHED"
FIELD_OPTIONS_MISSING = "FIELD_OPTIONS_MISSING"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def block_decode_failed(
    *,
    position: int,
    reason: str,
    hint: str = "Corrija a sintaxe YAML do bloco atlas-data indicado.",
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=BLOCK_DECODE_FAILED,
        message="Bloco atlas-data não pôde ser decodificado",
        details={"position": position, "reason": reason},
        hint=hint,
    )


def block_invalid_structure(
    *,
    position: int,
    reason: str,
    block_id: Optional[str] = None,
    hint: str = "Declare `schema` e `data` como listas no bloco atlas-data.",
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=BLOCK_INVALID_STRUCTURE,
        message="Bloco atlas-data estruturalmente inválido",
        details={"position": position, "block_id": block_id, "reason": reason},
        hint=hint,
    )


def block_entry_skipped(
    *,
    block_id: str,
    position: int,
    entry: str,
    reason: str,
) -> DiagnosticPayload:
    """Entrada malformada (opção, campo ou registro) ignorada; o bloco é mantido."""
    return DiagnosticPayload(
        type=BLOCK_ENTRY_SKIPPED,
        message="Entrada malformada do bloco atlas-data foi ignorada",
        details={"block_id": block_id, "position": position, "entry": entry, "reason": reason},
        hint=f"Corrija `{entry}` no bloco `{block_id}`.",
    )


def item_date_unparseable(
    *,
    block_id: str,
    item_ids: List[str],
    field: str,
    view: str,
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=ITEM_DATE_UNPARSEABLE,
        message="Itens sem data válida foram ignorados",
        details={"block_id": block_id, "item_ids": item_ids, "field": field, "view": view},
        hint=f"Preencha `{field}` com uma data ISO (YYYY-MM-DD ou YYYY-MM-DDTHH:MM:SS).",
    )


def item_group_unmatched(
    *,
    block_id: str,
    item_ids: List[str],
    fields: List[str],
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=ITEM_GROUP_UNMATCHED,
        message="Itens sem coluna correspondente foram ignorados",
        details={"block_id": block_id, "item_ids": item_ids, "fields": fields},
        hint="Use um valor declarado nas `options` do campo de agrupamento.",
    )


def field_options_missing(
    *,
    block_id: str,
    field: str,
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=FIELD_OPTIONS_MISSING,
        message="Campo de agrupamento sem options declaradas",
        details={"block_id": block_id, "field": field},
        hint=f"Declare `options` para o campo `{field}` no schema do bloco.",
    )
