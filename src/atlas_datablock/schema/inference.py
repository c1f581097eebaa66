"""
Inferência de schema a partir de valores.

Usada quando um registro chega sem `schema` declarado (seções de detalhe do
host). A inferência é deliberadamente rasa: olha apenas o valor de cada
chave, na ordem do registro, e ignora chaves internas (`_`).
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

from .model import FieldSchema, FieldType, SelectOption

_IMAGE_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)
_PHONE_RE = re.compile(r"^1\d{10}$")


def infer_field_type(value: Any) -> str:
    if isinstance(value, bool):
        return FieldType.TOGGLE.value
    if isinstance(value, (int, float)):
        return FieldType.NUMBER.value
    if isinstance(value, (list, tuple)):
        return FieldType.TAGS.value
    if isinstance(value, str):
        if value.startswith("data:image") or _IMAGE_RE.search(value):
            return FieldType.AVATAR.value
        if value.startswith("["):
            return FieldType.TAGS.value
        if "@" in value and "." in value:
            return FieldType.EMAIL.value
        if _PHONE_RE.match(value):
            return FieldType.PHONE.value
    return FieldType.TEXT.value


def infer_schema(record: Mapping[str, Any]) -> List[FieldSchema]:
    """Infere um schema (um campo por chave pública) a partir de um registro."""
    schema: List[FieldSchema] = []
    for key, value in record.items():
        key = str(key)
        if key.startswith("_"):
            continue
        schema.append(FieldSchema(key=key, label=key, type=infer_field_type(value)))
    return schema


def component_schema(key: str, component: Mapping[str, Any]) -> FieldSchema:
    """Constrói um FieldSchema a partir de uma definição de componente do front-matter."""
    mapping: Dict[str, str] = {
        "select": "select",
        "multi-select": "select",
        "radio": "select",
        "checkbox": "select",
        "date": "date",
        "text": "text",
        "textarea": "textarea",
        "number": "number",
        "phone": "phone",
        "email": "email",
        "toggle": "toggle",
        "avatar": "avatar",
        "image": "image",
        "tags": "tags",
        "file": "file",
        "files": "files",
        "rating": "rating",
        "user-auth": "user-auth",
    }
    ftype = mapping.get(str(component.get("type")), FieldType.TEXT.value)
    options = None
    raw_options = component.get("options")
    if isinstance(raw_options, list):
        options = [SelectOption.from_raw(o) for o in raw_options]
    label = component.get("label")
    return FieldSchema(key=key, label=str(label) if label else key, type=ftype, options=options)
