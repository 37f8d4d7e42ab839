"""Presentation layer - Textual widgets, formatters and the demo TUI."""
