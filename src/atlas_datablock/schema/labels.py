"""
Precedência de rótulos e ícones de campos.

O host do documento pode fornecer, via front-matter, uma tabela de
componentes por chave de campo (`{key: {label, icon}}`). Além disso, um
registro externo de rótulos pode ser consultado por chave. A precedência é
um contrato rígido, idêntico para todo consumidor:

    rótulo declarado (componente > schema) > registro externo > chave bruta

Ícones seguem a mesma ordem e terminam em `None`.

O registro externo é injetado como capacidade (`LabelResolver`), nunca
acessado como singleton de módulo.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from .model import FieldSchema


@runtime_checkable
class LabelResolver(Protocol):
    """Registro externo de rótulos/ícones consultado por chave de campo."""

    def label_for(self, key: str) -> Optional[str]:
        ...

    def icon_for(self, key: str) -> Optional[str]:
        ...


class MappingLabelResolver:
    """LabelResolver baseado em dicionários (útil para testes e hosts simples)."""

    def __init__(
        self,
        labels: Optional[Mapping[str, str]] = None,
        icons: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._labels: Dict[str, str] = dict(labels or {})
        self._icons: Dict[str, str] = dict(icons or {})

    def label_for(self, key: str) -> Optional[str]:
        return self._labels.get(key)

    def icon_for(self, key: str) -> Optional[str]:
        return self._icons.get(key)


def _component_attr(components: Optional[Mapping[str, Any]], key: str, attr: str) -> Optional[str]:
    if not components:
        return None
    entry = components.get(key)
    if not isinstance(entry, Mapping):
        return None
    value = entry.get(attr)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return str(value)


def _non_blank(value: Optional[str]) -> Optional[str]:
    if value is None or not str(value).strip():
        return None
    return value


def field_label(
    field: FieldSchema,
    *,
    resolver: Optional[LabelResolver] = None,
    components: Optional[Mapping[str, Any]] = None,
) -> str:
    """Rótulo de exibição de um campo segundo a precedência canônica."""
    declared = _component_attr(components, field.key, "label") or _non_blank(field.label)
    if declared:
        return declared
    if resolver is not None:
        registered = _non_blank(resolver.label_for(field.key))
        if registered:
            return registered
    return field.key


def field_icon(
    field: FieldSchema,
    *,
    resolver: Optional[LabelResolver] = None,
    components: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """Ícone de um campo segundo a mesma precedência; ausente -> None."""
    declared = _component_attr(components, field.key, "icon") or _non_blank(field.icon)
    if declared:
        return declared
    if resolver is not None:
        return _non_blank(resolver.icon_for(field.key))
    return None
