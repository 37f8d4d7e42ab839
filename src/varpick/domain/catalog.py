"""Catalog model: the hierarchical set of variables a user can pick from.

A catalog is a plain ``dict`` of top-level keys to ``CatalogNode``. Whether a
node is a leaf or an internal node is never stored; it is derived from the
presence of a non-empty ``children`` mapping every time it is needed.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from varpick.domain.exceptions import CatalogError

__all__ = ["CatalogNode", "Catalog", "parse_catalog", "is_leaf"]


class CatalogNode(BaseModel):
    """A single entry of the catalog.

    Unknown keys in raw data are ignored. A ``children`` value that is not a
    mapping is dropped rather than rejected, which turns the node into a leaf.
    """

    title: str = Field(..., description="Display title of the entry")
    description: Optional[str] = Field(None, description="Longer help text shown under the title")
    children: Optional[dict[str, "CatalogNode"]] = Field(
        None, description="Nested entries, keyed by the next address segment"
    )

    @field_validator("children", mode="before")
    @classmethod
    def _drop_malformed_children(cls, value: Any) -> Any:
        if value is None or isinstance(value, Mapping):
            return value
        return None

    @property
    def has_children(self) -> bool:
        return bool(self.children)


CatalogNode.model_rebuild()


Catalog = dict[str, CatalogNode]

_catalog_adapter = TypeAdapter(Catalog)


def is_leaf(node: CatalogNode) -> bool:
    """Return True when the node has no (or an empty) children mapping."""
    return not node.has_children


def parse_catalog(data: Mapping[str, Any] | None) -> Catalog:
    """
    Validate raw catalog data into ``CatalogNode`` instances.

    Already-built nodes are accepted as-is. Key order is preserved.

    Args:
        data: Mapping of top-level keys to node mappings (or nodes)

    Returns:
        Catalog dictionary

    Raises:
        CatalogError: If the data is not a mapping or a node is malformed
            (not a mapping, missing its title, ...)
    """
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise CatalogError(f"Catalog must be a mapping of keys to nodes, got {type(data).__name__}")

    try:
        return _catalog_adapter.validate_python(dict(data))
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog structure: {e}") from e
