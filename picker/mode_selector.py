"""Mode detection for dual CLI/interactive execution.

Decides whether a run should drive the interactive Selector or answer a
one-shot CLI query, based on the ``general.interactive_mode`` config flag and
the command-line overrides.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from manifest.core.config import CONFIG_ENV_VAR, get_config, get_general_config

logger = logging.getLogger(__name__)

# CLI actions that only make sense without the interactive menus
CLI_ACTIONS = ("version", "latest", "list_channel")


def _has_cli_action(args: argparse.Namespace) -> bool:
    return any(getattr(args, name, None) for name in CLI_ACTIONS)


def detect_mode(args: argparse.Namespace) -> bool:
    """Return True for interactive mode.

    Precedence: --interactive, then --cli or any CLI action flag, then the
    ``general.interactive_mode`` config value.
    """
    if getattr(args, "interactive", False):
        return True
    if getattr(args, "cli", False) or _has_cli_action(args):
        return False
    return bool(get_general_config().get("interactive_mode", True))


def run_with_mode_detection(
    parser_factory: Callable[[], argparse.ArgumentParser],
    script_name: str,
    argv: Optional[Sequence[str]] = None,
    setup_logging: Optional[Callable[[argparse.Namespace], None]] = None,
) -> Tuple[Dict[str, Any], bool, argparse.Namespace]:
    """Parse arguments, load the config they point at and pick the mode.

    Args:
        parser_factory: Function that returns an ArgumentParser
        script_name: Name of the calling script (for log messages)
        argv: Arguments to parse (defaults to sys.argv[1:])
        setup_logging: Called with the parsed args once the config is loaded,
            before anything is logged

    Returns:
        Tuple of (config_dict, interactive_mode, args)
    """
    parser = parser_factory()
    args = parser.parse_args(argv)

    if getattr(args, "config", None):
        os.environ[CONFIG_ENV_VAR] = args.config
    config = get_config(force_reload=True)
    if setup_logging is not None:
        setup_logging(args)

    if getattr(args, "interactive", False) and _has_cli_action(args):
        logger.warning("%s: --interactive given; ignoring CLI lookup flags", script_name)

    interactive_mode = detect_mode(args)
    logger.debug("%s: running in %s mode", script_name, "interactive" if interactive_mode else "CLI")
    return config, interactive_mode, args
