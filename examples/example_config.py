#!/usr/bin/env python3
"""
Config-driven Emitter Example

Loads named emitter settings and logging options from examples/config.yml.

Usage:
    python examples/example_config.py [path/to/config.yml] [emitter-name]
"""

import os
import sys

from timelet import Emitter
from timelet.config import ConfigManager
from timelet.logger import configure_logging, get_logger

logger = get_logger("examples.config")


def main():
    default_path = os.path.join(os.path.dirname(__file__), "config.yml")
    config_path = sys.argv[1] if len(sys.argv) > 1 else default_path
    name = sys.argv[2] if len(sys.argv) > 2 else "heartbeat"

    config = ConfigManager(config_path=config_path).load()
    configure_logging(config.logger_config())
    logger.info(f"Configured emitters: {', '.join(config.list_emitter_names())}")

    settings = config.get_settings(name)
    handle = Emitter().emit_with_settings(
        settings, lambda now, ctx: logger.info(f"{name} #{ctx.index} at {now.isoformat()}")
    )
    try:
        result = handle.join.join()
    except KeyboardInterrupt:
        result = handle.unsubscribe().join()
    logger.info(f"{name} stopped: {result.reason.value}")


if __name__ == "__main__":
    main()
