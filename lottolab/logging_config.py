"""Logging configuration."""

from __future__ import annotations

import logging

from lottolab.config import BaseConfig


def configure_logging(config: type[BaseConfig]) -> None:
    """Configure structured-ish logs for the computation core.

    Note: Using stdlib logging only (no extra deps).
    """

    level_name = str(getattr(config, "LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
