"""
Flattening of the hierarchical catalog into selectable menu items.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from varpick.domain.catalog import CatalogNode
from varpick.domain.types import ADDRESS_SEPARATOR, AddressableItem, ItemGroup, MenuSection
from varpick.logger import get_logger

logger = get_logger("flattener")


def flatten(
    catalog: Mapping[str, CatalogNode],
    include_parent_nodes: bool = False,
) -> list[AddressableItem]:
    """
    Flatten a catalog into addressable items, depth-first and pre-order.

    Top-level entries and children are visited in declaration order. Leaves are
    always emitted; internal nodes only when ``include_parent_nodes`` is set,
    and then before their descendants. An internal node becomes the group of
    its direct children, never of itself.

    Args:
        catalog: Mapping of top-level keys to catalog nodes
        include_parent_nodes: Whether internal nodes are selectable too

    Returns:
        Items in traversal order
    """
    items: list[AddressableItem] = []
    # (key path, node, inherited group); reversed so pop() yields declaration order
    stack: list[tuple[tuple[str, ...], CatalogNode, ItemGroup | None]] = [
        ((key,), node, None) for key, node in reversed(list(catalog.items()))
    ]

    while stack:
        path, node, group = stack.pop()
        address = ADDRESS_SEPARATOR.join(path)
        title = node.title or path[-1]

        if not node.has_children:
            items.append(AddressableItem(address, title, node.description, group))
            continue

        if include_parent_nodes:
            items.append(AddressableItem(address, title, node.description, group))

        child_group = ItemGroup(address=address, title=title)
        for key, child in reversed(list(node.children.items())):
            stack.append(((*path, key), child, child_group))

    logger.debug(f"Flattened catalog into {len(items)} item(s) (include_parent_nodes={include_parent_nodes})")
    return items


def available_addresses(
    catalog: Mapping[str, CatalogNode],
    include_parent_nodes: bool = False,
) -> list[str]:
    """Return the addresses of ``flatten(catalog, include_parent_nodes)``, in the same order."""
    return [item.address for item in flatten(catalog, include_parent_nodes)]


def build_sections(
    items: Sequence[AddressableItem],
    ungrouped_title: str | None = None,
) -> list[MenuSection]:
    """
    Arrange flattened items into the sections shown by the menu.

    Ungrouped items come first as a single section, followed by one section per
    group in the order each group was first seen. Items keep their relative
    flatten order inside a section, so every group is contiguous in the menu.

    Args:
        items: Output of ``flatten``
        ungrouped_title: Heading of the ungrouped section (None for no heading)

    Returns:
        Non-empty sections in display order
    """
    ungrouped: list[AddressableItem] = []
    grouped: dict[str, list[AddressableItem]] = {}
    groups: dict[str, ItemGroup] = {}

    for item in items:
        if item.group is None:
            ungrouped.append(item)
            continue
        key = item.group.address
        if key not in grouped:
            grouped[key] = []
            groups[key] = item.group
        grouped[key].append(item)

    sections: list[MenuSection] = []
    if ungrouped:
        sections.append(MenuSection(title=ungrouped_title, items=tuple(ungrouped)))
    for key, members in grouped.items():
        group = groups[key]
        sections.append(MenuSection(title=group.title, items=tuple(members), group=group))
    return sections


def menu_order(sections: Sequence[MenuSection]) -> list[AddressableItem]:
    """Concatenate section items; this is the order keyboard navigation walks."""
    return [item for section in sections for item in section.items]
