"""TUI (Terminal User Interface) application.

This module contains the demo varpick application built with Textual.
"""

from varpick.presentation.tui.app import VariablePickerApp

__all__ = ["VariablePickerApp"]
