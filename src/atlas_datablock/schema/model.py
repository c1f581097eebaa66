"""
Schema canônico — Atlas Data Block v1.

Um bloco `atlas-data` descreve, dentro do corpo de um documento, uma tabela
tipada: um array `schema` de campos e um array `data` de registros. Todas as
views (lista, kanban, calendário, timeline, árvore, grafo, galeria) consomem
exatamente este modelo.

Esta implementação evita dependências externas (ex.: Pydantic) para manter
o core leve; a validação é explícita e mínima.

Decisões:
    - Valores dos registros são opacos em repouso (dict copiado do YAML);
      a interpretação acontece apenas na exibição, guiada por `FieldSchema.type`.
    - A única validação do bloco é a presença de `schema` e `data` como listas
      (vazias são aceitas). Entradas malformadas (opção sem `value`, campo sem
      `key`, registro que não é mapping) são puladas localmente e reportadas;
      o restante do bloco é mantido.
    - Chaves duplicadas no schema não são rejeitadas; buscas retornam a primeira.
"""

from __future__ import annotations

from collections.abc import Hashable
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from atlas_datablock.core.context import EngineContext, report
from atlas_datablock.core.diagnostics import block_entry_skipped
from atlas_datablock.core.errors import BlockValidationError


class FieldType(str, Enum):
    """Tipos de campo conhecidos. Tipos desconhecidos são exibidos como texto."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    DATETIME = "datetime"
    SELECT = "select"
    MULTI_SELECT = "multi-select"
    STATUS = "status"
    TAGS = "tags"
    BOOLEAN = "boolean"
    TOGGLE = "toggle"
    URL = "url"
    LINK = "link"
    EMAIL = "email"
    PHONE = "phone"
    IMAGE = "image"
    AVATAR = "avatar"
    FILE = "file"
    FILES = "files"
    RATING = "rating"
    REFERENCE = "reference"
    OBJECT = "object"
    USER_AUTH = "user-auth"


SELECT_LIKE_TYPES = frozenset({FieldType.SELECT.value, FieldType.MULTI_SELECT.value, FieldType.STATUS.value})

NEUTRAL_COLOR = "gray"
PALETTE_TOKENS = frozenset(
    {"gray", "slate", "gold", "purple", "blue", "green", "yellow", "orange", "red"}
)

# chaves aceitas no documento -> atributo do AtlasDataBlock
_BLOCK_ALIASES = {
    "groupBy": "group_by",
    "group_by": "group_by",
    "sortBy": "sort_by",
    "sort_by": "sort_by",
    "sortOrder": "sort_order",
    "sort_order": "sort_order",
    "swimlaneBy": "swimlane_by",
    "swimlane_by": "swimlane_by",
    "dateField": "date_field",
    "date_field": "date_field",
    "endDateField": "end_date_field",
    "end_date_field": "end_date_field",
    "coverField": "cover_field",
    "cover_field": "cover_field",
}
_BLOCK_CORE_KEYS = {"id", "type", "title", "icon", "schema", "data"}


def value_key(value: Any) -> Any:
    """
    Forma canônica de comparação de um valor bruto contra `SelectOption.value`.

    O YAML pode decodificar `1` ou `true` como int/bool enquanto o valor da
    opção é sempre string; a comparação é feita pela forma textual.
    Valores compostos (listas, mappings) viram `None` e nunca correspondem
    a uma opção; o retorno é sempre hashable.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    if not isinstance(value, Hashable):
        return None
    return value


def palette_token(color: Optional[str]) -> str:
    """Resolve um token simbólico de cor; desconhecido/ausente -> neutro."""
    if isinstance(color, str) and color in PALETTE_TOKENS:
        return color
    return NEUTRAL_COLOR


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise BlockValidationError(msg)


# (entrada, motivo) -> None; o padrão é estrito e levanta BlockValidationError
SkipFn = Callable[[str, str], None]


def _raise_skip(entry: str, reason: str) -> None:
    raise BlockValidationError(f"{entry}: {reason}")


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class SelectOption:
    """Valor enumerado de um campo select-like."""

    value: str
    label: str
    color: Optional[str] = None
    icon: Optional[str] = None

    @property
    def color_token(self) -> str:
        return palette_token(self.color)

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "label": self.label, "color": self.color, "icon": self.icon}

    @classmethod
    def from_raw(cls, raw: Any) -> "SelectOption":
        if isinstance(raw, Mapping):
            _expect(value_key(raw.get("value")) is not None, "option.value must be a scalar")
            value = str(value_key(raw.get("value")))
            label = raw.get("label")
            return cls(
                value=value,
                label=str(label) if label is not None else value,
                color=_opt_str(raw.get("color")),
                icon=_opt_str(raw.get("icon")),
            )
        # forma abreviada: options: [todo, done]
        _expect(raw is not None and not isinstance(raw, (list, dict)), "option must be a mapping or scalar")
        value = str(value_key(raw))
        return cls(value=value, label=value)


@dataclass(frozen=True)
class FieldSchema:
    """Forma declarada de uma coluna do bloco."""

    key: str
    label: Optional[str] = None
    type: str = FieldType.TEXT.value
    options: Optional[List[SelectOption]] = None
    min: Optional[float] = None
    max: Optional[float] = None
    unit: Optional[str] = None
    currency: Optional[str] = None
    icon: Optional[str] = None

    @property
    def is_select_like(self) -> bool:
        return self.type in SELECT_LIKE_TYPES

    @property
    def field_type(self) -> Optional[FieldType]:
        try:
            return FieldType(self.type)
        except ValueError:
            return None

    def find_option(self, raw_value: Any) -> Optional[SelectOption]:
        if not self.options:
            return None
        wanted = value_key(raw_value)
        for option in self.options:
            if option.value == wanted:
                return option
        return None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"key": self.key, "label": self.label, "type": self.type}
        if self.options is not None:
            out["options"] = [o.to_dict() for o in self.options]
        for name in ("min", "max", "unit", "currency", "icon"):
            if getattr(self, name) is not None:
                out[name] = getattr(self, name)
        return out

    @classmethod
    def from_raw(cls, raw: Any, index: int = 0, skip: SkipFn = _raise_skip) -> "FieldSchema":
        """
        Materializa um campo do schema.

        `key` ausente ou um campo que não é mapping sempre levanta
        BlockValidationError. Opções malformadas, `options` que não é lista e
        `min`/`max` não numéricos são entregues a `skip`; com o `skip` padrão
        também levantam, com um `skip` tolerante são ignorados.
        """
        _expect(isinstance(raw, Mapping), f"schema[{index}] must be a mapping")
        key = raw.get("key")
        _expect(_is_non_empty_str(key) or isinstance(key, int), f"schema[{index}].key is required")

        options_raw = raw.get("options")
        options: Optional[List[SelectOption]] = None
        if options_raw is not None:
            if isinstance(options_raw, list):
                options = []
                for j, o in enumerate(options_raw):
                    try:
                        options.append(SelectOption.from_raw(o))
                    except BlockValidationError as e:
                        skip(f"schema[{index}].options[{j}]", str(e))
            else:
                skip(f"schema[{index}].options", "options must be a list")

        def _num(name: str) -> Optional[float]:
            v = raw.get(name)
            if v is None or isinstance(v, bool):
                return None
            if not isinstance(v, (int, float)):
                skip(f"schema[{index}].{name}", f"{name} must be numeric")
                return None
            return v

        ftype = raw.get("type")
        return cls(
            key=str(key),
            label=_opt_str(raw.get("label")),
            type=str(ftype) if ftype else FieldType.TEXT.value,
            options=options,
            min=_num("min"),
            max=_num("max"),
            unit=_opt_str(raw.get("unit")),
            currency=_opt_str(raw.get("currency")),
            icon=_opt_str(raw.get("icon")),
        )


@dataclass(frozen=True)
class AtlasDataBlock:
    """Representação interna explícita de um bloco `atlas-data`."""

    id: str
    type: str
    schema: List[FieldSchema]
    data: List[Dict[str, Any]]
    title: Optional[str] = None
    icon: Optional[str] = None
    group_by: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    swimlane_by: Optional[str] = None
    date_field: Optional[str] = None
    end_date_field: Optional[str] = None
    cover_field: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def get_field(self, key: str) -> Optional[FieldSchema]:
        for f in self.schema:
            if f.key == key:
                return f
        return None

    def options_for(self, key: str) -> List[SelectOption]:
        f = self.get_field(key)
        return list(f.options) if f is not None and f.options else []

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "icon": self.icon,
            "schema": [f.to_dict() for f in self.schema],
            "data": deepcopy(self.data),
        }
        for attr in (
            "group_by",
            "sort_by",
            "sort_order",
            "swimlane_by",
            "date_field",
            "end_date_field",
            "cover_field",
        ):
            value = getattr(self, attr)
            if value is not None:
                out[attr] = value
        if self.extras:
            out["extras"] = deepcopy(self.extras)
        return out


def _materialize_item(raw: Mapping[str, Any], index: int, block_id: str) -> Dict[str, Any]:
    item = deepcopy(dict(raw))
    item_id = item.get("id")
    item["id"] = str(item_id) if item_id not in (None, "") else f"{block_id}-{index + 1}"
    return item


def validate_block(
    data: Any,
    *,
    position: int = 1,
    ctx: Optional[EngineContext] = None,
) -> AtlasDataBlock:
    """
    Valida e materializa um AtlasDataBlock a partir do documento decodificado.

    Args:
        data: valor retornado pelo decodificador YAML.
        position: índice (1-based) da ocorrência no texto, usado para o id padrão.
        ctx: recebe um warning `BLOCK_ENTRY_SKIPPED` por entrada malformada.

    Raises:
        BlockValidationError: se a raiz não for mapping ou se `schema`/`data`
            estiverem ausentes ou não forem listas.
    """
    _expect(isinstance(data, Mapping), "atlas-data root must be a mapping")

    schema_raw = data.get("schema")
    _expect(isinstance(schema_raw, list), "schema must be a list")

    data_raw = data.get("data")
    _expect(isinstance(data_raw, list), "data must be a list")

    raw_id = data.get("id")
    block_id = str(raw_id) if raw_id not in (None, "") else f"atlas-data-{position}"

    def skip(entry: str, reason: str) -> None:
        report(
            ctx,
            stage="parser",
            payload=block_entry_skipped(block_id=block_id, position=position, entry=entry, reason=reason),
        )

    schema: List[FieldSchema] = []
    for i, f in enumerate(schema_raw):
        try:
            schema.append(FieldSchema.from_raw(f, i, skip=skip))
        except BlockValidationError as e:
            skip(f"schema[{i}]", str(e))

    items: List[Dict[str, Any]] = []
    for i, item in enumerate(data_raw):
        if not isinstance(item, Mapping):
            skip(f"data[{i}]", f"data[{i}] must be a mapping")
            continue
        # o índice original é mantido no id padrão
        items.append(_materialize_item(item, i, block_id))

    attrs: Dict[str, Any] = {}
    extras: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _BLOCK_CORE_KEYS:
            continue
        attr = _BLOCK_ALIASES.get(str(key))
        if attr is not None:
            # camelCase e snake_case coexistindo: o primeiro declarado vence
            attrs.setdefault(attr, _opt_str(value))
        else:
            extras[str(key)] = deepcopy(value)

    block_type = data.get("type")
    return AtlasDataBlock(
        id=block_id,
        type=str(block_type) if block_type else "generic",
        title=_opt_str(data.get("title")),
        icon=_opt_str(data.get("icon")),
        schema=schema,
        data=items,
        extras=extras,
        **attrs,
    )
