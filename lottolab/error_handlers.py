"""Centralized error handling for the controller layer."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from marshmallow import ValidationError as MarshmallowValidationError

from lottolab.errors import LotteryError
from lottolab.utils.responses import fail

logger = logging.getLogger(__name__)

Handler = Callable[..., dict[str, Any]]


def handle_errors(func: Handler) -> Handler:
    """Turn exceptions raised by a controller into error envelopes."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> dict[str, Any]:
        try:
            return func(*args, **kwargs)
        except LotteryError as exc:
            logger.info("%s failed: %s (%s)", func.__name__, exc.message, exc.code)
            return fail(exc.code, exc.message, exc.details)
        except MarshmallowValidationError as exc:
            # exc.messages is a dict of field -> list[str]
            return fail("validation_error", "Validation error", exc.messages)
        except Exception:
            logger.exception("Unhandled exception in %s", func.__name__)
            return fail("internal_error", "Internal error")

    return wrapper
