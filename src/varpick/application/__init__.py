"""Application layer: flattening, formatting, insertion planning and the menu state machine."""

from varpick.application.config import PickerConfig, build_config, load_picker_config
from varpick.application.controller import MenuController
from varpick.application.flattener import available_addresses, build_sections, flatten, menu_order
from varpick.application.formatter import format_token, resolve_token_policy
from varpick.application.picker import VariablePicker
from varpick.application.planner import InsertionPlan, InsertionPlanner, plan_insertion

__all__ = [
    "PickerConfig",
    "build_config",
    "load_picker_config",
    "MenuController",
    "available_addresses",
    "build_sections",
    "flatten",
    "menu_order",
    "format_token",
    "resolve_token_policy",
    "VariablePicker",
    "InsertionPlan",
    "InsertionPlanner",
    "plan_insertion",
]
