"""
View canônica: árvore (outline / mindmap).

Responsabilidades:
- Descer recursivamente o array `children` de cada registro
- Resolver `type`/`status` contra o schema do bloco em TODAS as profundidades
- Achatar a árvore em pré-ordem (`GraphNode`) para a view de grafo

Invariantes:
- `level` começa em 0 nas raízes e cresce 1 por nível
- `len(flatten_tree(nodes)) == count_nodes(nodes)`
- `TreeNode` é uma árvore de valores acíclica, sem ponteiro para o pai
  nem estado de interface (expandido/recolhido fica com o chamador)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from atlas_datablock.schema.model import AtlasDataBlock, FieldSchema, SelectOption


@dataclass(frozen=True)
class TreeNode:
    id: str
    name: str
    level: int
    type: Optional[str] = None
    type_option: Optional[SelectOption] = None
    status: Optional[str] = None
    status_option: Optional[SelectOption] = None
    owner: Optional[str] = None
    description: Optional[str] = None
    children: List["TreeNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "type": self.type,
            "type_option": self.type_option.to_dict() if self.type_option else None,
            "status": self.status,
            "status_option": self.status_option.to_dict() if self.status_option else None,
            "owner": self.owner,
            "description": self.description,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass(frozen=True)
class GraphNode:
    """Nó achatado: hierarquia descartada, opções resolvidas preservadas."""

    id: str
    name: str
    type: Optional[str] = None
    type_option: Optional[SelectOption] = None
    status: Optional[str] = None
    status_option: Optional[SelectOption] = None


def _text(raw: Any) -> Optional[str]:
    if raw is None or raw == "":
        return None
    return str(raw)


def _option(f: Optional[FieldSchema], raw: Any) -> Optional[SelectOption]:
    return f.find_option(raw) if f is not None else None


def _parse_node(
    item: Mapping[str, Any],
    node_id: str,
    level: int,
    type_field: Optional[FieldSchema],
    status_field: Optional[FieldSchema],
) -> TreeNode:
    children_raw = item.get("children")
    children: List[TreeNode] = []
    if isinstance(children_raw, list):
        for index, child in enumerate(children_raw):
            if not isinstance(child, Mapping):
                continue
            child_id = _text(child.get("id")) or f"{node_id}.{index + 1}"
            children.append(_parse_node(child, child_id, level + 1, type_field, status_field))

    return TreeNode(
        id=node_id,
        name=_text(item.get("name")) or _text(item.get("title")) or node_id,
        level=level,
        type=_text(item.get("type")),
        type_option=_option(type_field, item.get("type")),
        status=_text(item.get("status")),
        status_option=_option(status_field, item.get("status")),
        owner=_text(item.get("owner")),
        description=_text(item.get("description")),
        children=children,
    )


def parse_tree(block: AtlasDataBlock) -> List[TreeNode]:
    type_field = block.get_field("type")
    status_field = block.get_field("status")
    return [_parse_node(item, item["id"], 0, type_field, status_field) for item in block.data]


def flatten_tree(nodes: Sequence[TreeNode]) -> List[GraphNode]:
    """Pré-ordem: cada nó antes de seus filhos, filhos na ordem declarada."""
    result: List[GraphNode] = []

    def visit(node: TreeNode) -> None:
        result.append(
            GraphNode(
                id=node.id,
                name=node.name,
                type=node.type,
                type_option=node.type_option,
                status=node.status,
                status_option=node.status_option,
            )
        )
        for child in node.children:
            visit(child)

    for node in nodes:
        visit(node)
    return result


def count_nodes(nodes: Sequence[TreeNode]) -> int:
    return sum(1 + count_nodes(n.children) for n in nodes)
