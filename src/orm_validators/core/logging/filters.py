# src/orm_validators/core/logging/filters.py
"""
Logging filters

Correlation ID filter and helpers, plus a redaction filter.

A validation usually runs inside a larger unit of work (a form submission, an
import batch, a request handled by the host application). The host can tag that
unit with `set_correlation_id(...)`; every record logged by the validators in the
same context then carries `correlation_id`, so the lookup and the verdict can be
matched to the unit that triggered them.

`contextvars.ContextVar` keeps the id isolated per asyncio task and preserves it
across `await` boundaries, which matters because repository lookups are awaited.

The filter never drops records; it only guarantees the attribute exists so
formatters referencing `%(correlation_id)s` cannot KeyError. The sentinel is "-".
"""

import logging
from logging import LogRecord
import contextvars

_correlation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def set_correlation_id(correlation_id: str | None):
    """
    Set the correlation id in the current context and return the token to allow reset.
    """
    return _correlation_id_ctx.set(correlation_id)


def reset_correlation_id(token):
    """
    Reset the contextvar to the previously saved token returned by set_correlation_id().
    """
    _correlation_id_ctx.reset(token)


def get_correlation_id() -> str | None:
    return _correlation_id_ctx.get()


class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that guarantees every LogRecord has a `correlation_id` attribute.

    Precedence:
      1. record.correlation_id, if passed explicitly via `extra`
      2. the contextvar value
      3. the sentinel "-"
    """

    def filter(self, record: LogRecord) -> bool:
        record.correlation_id = (
            getattr(record, "correlation_id", None) or get_correlation_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """Mask record attributes whose name looks sensitive."""

    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "ssn", "authorization"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
