"""Lottery strategy generation and Monte Carlo simulation core."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from lottolab.config import BaseConfig


def bootstrap() -> type[BaseConfig]:
    """Process-level setup.

    Loads `.env` before the configuration module reads the environment,
    then configures logging.

    Returns:
        Resolved configuration class.
    """
    load_dotenv()

    from lottolab.config import get_config
    from lottolab.logging_config import configure_logging

    config = get_config()
    configure_logging(config)
    return config
