"""
varpick widgets - Textual widgets for picking and inserting variables.
"""

from .variable_picker import MenuList, PickerTrigger, VariablePickerWidget

__all__ = [
    "MenuList",
    "PickerTrigger",
    "VariablePickerWidget",
]
