"""
Correlation ids for action logs

TxMaker wraps each action in a CorrelationContext so the build, submit and
poll lines of one call share an id. Ids live in a ContextVar, so two actions
awaited concurrently on the same loop never see each other's id.
"""

import logging
import uuid
import contextvars
from typing import Optional

_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "txmaker_correlation_id", default=None
)


def generate_correlation_id() -> str:
    """12 hex chars, short enough to grep for"""
    return uuid.uuid4().hex[:12]


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> contextvars.Token:
    """Bind an id to the current context; reset with the returned token"""
    return _correlation_id.set(correlation_id)


class CorrelationContext:
    """
    Scope a fresh correlation id, named after the action

    Usage:
        with CorrelationContext("mint") as cid:   # "mint_3f9a0c1b2d4e"
            ...
    """

    def __init__(self, action: Optional[str] = None):
        suffix = generate_correlation_id()
        self.correlation_id = f"{action}_{suffix}" if action else suffix
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = set_correlation_id(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            _correlation_id.reset(self._token)
            self._token = None


def log_with_correlation(
    log: logging.Logger,
    level: int,
    message: str,
    action: str,
    **fields,
):
    """
    Log through the caller's logger, prefixed with "[cid] [action]"

    The id and action are also attached as record attributes
    (record.correlation_id, record.action) along with any extra fields,
    for handlers that emit structured output.
    """
    cid = get_correlation_id()
    prefix = f"[{cid}] [{action}]" if cid else f"[{action}]"
    log.log(
        level,
        f"{prefix} {message}",
        extra={"correlation_id": cid, "action": action, **fields},
    )
