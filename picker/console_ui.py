"""Console UI utilities and input sources for the version picker.

This module provides styled console output, the line-oriented InputSource
protocol consumed by the Selector, and its terminal and scripted
implementations.
"""
from __future__ import annotations

import sys
from typing import Iterable, List, Protocol

from manifest.model import ReleaseEntry


class InputSource(Protocol):
    """Anything that can hand the selector one line of text per prompt."""

    def read_line(self, prompt: str = "") -> str:
        ...


class ConsoleInput:
    """Reads answers from the terminal via ``input()``.

    End of input reads as an empty answer, which no menu accepts. Only Ctrl-C
    cancels.
    """

    def read_line(self, prompt: str = "") -> str:
        try:
            return input(f"{ConsoleUI.BOLD}{prompt}{ConsoleUI.RESET}")
        except EOFError:
            print()
            return ""


class ScriptedInput:
    """Replays a fixed sequence of answers.

    Raises EOFError once the script is exhausted.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines: List[str] = list(lines)
        self.prompts: List[str] = []

    def read_line(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError("scripted input exhausted")
        return self._lines.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._lines)


class ConsoleUI:
    """Simple console UI utilities with ANSI color support."""

    # ANSI color codes (Windows 10+ supports these)
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    RED = "\033[91m"

    @staticmethod
    def enable_ansi() -> None:
        """Enable ANSI escape codes on Windows."""
        if sys.platform == "win32":
            try:
                import ctypes
                kernel32 = ctypes.windll.kernel32
                kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            except (AttributeError, OSError):
                pass

    @staticmethod
    def print_header(title: str, subtitle: str = "") -> None:
        """Print a styled header."""
        width = 70
        print()
        print(f"{ConsoleUI.BOLD}{ConsoleUI.CYAN}{'=' * width}{ConsoleUI.RESET}")
        print(f"{ConsoleUI.BOLD}{ConsoleUI.CYAN}  {title}{ConsoleUI.RESET}")
        if subtitle:
            print(f"{ConsoleUI.DIM}  {subtitle}{ConsoleUI.RESET}")
        print(f"{ConsoleUI.BOLD}{ConsoleUI.CYAN}{'=' * width}{ConsoleUI.RESET}")
        print()

    @staticmethod
    def print_separator(char: str = "-", width: int = 70) -> None:
        """Print a separator line."""
        print(f"{ConsoleUI.DIM}{char * width}{ConsoleUI.RESET}")

    @staticmethod
    def print_info(label: str, message: str = "") -> None:
        """Print an info message."""
        if message:
            print(f"{ConsoleUI.BLUE}[{label}]{ConsoleUI.RESET} {message}")
        else:
            print(f"{ConsoleUI.BLUE}{label}{ConsoleUI.RESET}")

    @staticmethod
    def print_success(message: str) -> None:
        """Print a success message."""
        print(f"{ConsoleUI.GREEN}✓ {message}{ConsoleUI.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        """Print a warning message."""
        print(f"{ConsoleUI.YELLOW}⚠ {message}{ConsoleUI.RESET}")

    @staticmethod
    def print_error(message: str) -> None:
        """Print an error message."""
        print(f"{ConsoleUI.RED}✗ {message}{ConsoleUI.RESET}")

    @staticmethod
    def print_entry(entry: ReleaseEntry, label: str) -> None:
        """Print the details of one version.

        Args:
            entry: Version to show
            label: Human-readable name, usually from selector.display()
        """
        ConsoleUI.print_separator("=")
        ConsoleUI.print_success(label)
        print(f"  {ConsoleUI.BOLD}Id:{ConsoleUI.RESET} {entry.identifier}")
        print(f"  {ConsoleUI.BOLD}Type:{ConsoleUI.RESET} {entry.channel.value}")
        print(f"  {ConsoleUI.BOLD}URL:{ConsoleUI.RESET} {entry.source_locator}")
        print(f"  {ConsoleUI.BOLD}Released:{ConsoleUI.RESET} {entry.published_at}")
        ConsoleUI.print_separator("=")


__all__ = ["ConsoleUI", "InputSource", "ConsoleInput", "ScriptedInput"]
