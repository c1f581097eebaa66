"""Atlas DataBlock — Parser de blocos embutidos em documentos."""

from .blocks import (  # noqa: F401
    decode_block,
    parse_block_by_id,
    parse_blocks,
    parse_blocks_by_type,
    parse_first_block,
)
