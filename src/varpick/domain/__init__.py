"""Domain layer: catalog model, value types, token policies and host protocols."""

from varpick.domain.catalog import Catalog, CatalogNode, is_leaf, parse_catalog
from varpick.domain.exceptions import CatalogError, ConfigurationError, VarpickError
from varpick.domain.protocols import MenuView, PointerSource, Subscription, TextBuffer
from varpick.domain.tokens import CustomFormat, StaticWrap, TokenPolicy, TokenWrap
from varpick.domain.types import (
    AddressableItem,
    CloseReason,
    ItemGroup,
    MenuKey,
    MenuSection,
    MenuState,
    SelectionContext,
)

__all__ = [
    "Catalog",
    "CatalogNode",
    "is_leaf",
    "parse_catalog",
    "CatalogError",
    "ConfigurationError",
    "VarpickError",
    "MenuView",
    "PointerSource",
    "Subscription",
    "TextBuffer",
    "CustomFormat",
    "StaticWrap",
    "TokenPolicy",
    "TokenWrap",
    "AddressableItem",
    "CloseReason",
    "ItemGroup",
    "MenuKey",
    "MenuSection",
    "MenuState",
    "SelectionContext",
]
