"""Interactive front end for the version picker.

This package contains:
- cli: CLI entry point supporting dual interactive/CLI modes
- selector: Two-step channel/version selection state machine
- mode_selector: Mode detection for interactive vs CLI execution
- console_ui: Styled console output and line input sources
"""

__all__ = [
    "cli",
    "selector",
    "mode_selector",
    "console_ui",
]
