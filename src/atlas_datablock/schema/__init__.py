"""Atlas DataBlock — Schema (modelo canônico, rótulos e inferência)."""

from .model import (  # noqa: F401
    AtlasDataBlock,
    FieldSchema,
    FieldType,
    NEUTRAL_COLOR,
    SelectOption,
    palette_token,
    validate_block,
    value_key,
)
from .labels import LabelResolver, MappingLabelResolver, field_icon, field_label  # noqa: F401
from .inference import component_schema, infer_field_type, infer_schema  # noqa: F401
