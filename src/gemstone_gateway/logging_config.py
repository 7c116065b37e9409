"""
Centralized logging configuration for the gateway.
"""

import logging
import sys

from gemstone_gateway.config import Settings


def setup_logging(config: Settings | None = None) -> None:
    """
    Setup centralized logging configuration.

    Args:
        config: Settings instance, uses the global settings if None
    """
    if config is None:
        from gemstone_gateway.config import settings as default_settings

        config = default_settings

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
