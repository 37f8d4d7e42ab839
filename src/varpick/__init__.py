"""varpick - hierarchical variable picker for Textual text editors."""

from varpick.application import (
    InsertionPlan,
    MenuController,
    PickerConfig,
    VariablePicker,
    available_addresses,
    build_config,
    build_sections,
    flatten,
    format_token,
    load_picker_config,
    plan_insertion,
    resolve_token_policy,
)
from varpick.domain import (
    AddressableItem,
    CatalogError,
    CatalogNode,
    ConfigurationError,
    CustomFormat,
    ItemGroup,
    MenuState,
    SelectionContext,
    StaticWrap,
    TextBuffer,
    parse_catalog,
)
from varpick.domain.events import EventBus

__version__ = "0.1.0"

__all__ = [
    "InsertionPlan",
    "MenuController",
    "PickerConfig",
    "VariablePicker",
    "available_addresses",
    "build_config",
    "build_sections",
    "flatten",
    "format_token",
    "load_picker_config",
    "plan_insertion",
    "resolve_token_policy",
    "AddressableItem",
    "CatalogError",
    "CatalogNode",
    "ConfigurationError",
    "CustomFormat",
    "ItemGroup",
    "MenuState",
    "SelectionContext",
    "StaticWrap",
    "TextBuffer",
    "parse_catalog",
    "EventBus",
]
