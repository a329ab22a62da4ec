"""Logging setup with contextual dimensions.

Every logger handed out by this module is a ``ContextualLogger``: a
``logging.LoggerAdapter`` carrying a dict of dimensions (request id, caller
id, resource name, ...). Dimensions are attached to each record's ``extra``
so the JSON formatter emits them as top-level keys.

Usage:
    from lorekeeper.core.logging import logger

    log = logger.with_context(request_id="abc", resource="tags")
    log.info("Created tag")
"""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from pythonjsonlogger.json import JsonFormatter

from lorekeeper.core.config import settings


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that merges persistent dimensions into each record."""

    def __init__(
        self,
        logger: logging.Logger,
        dimensions: Optional[Dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Create a contextual logger.

        Args:
            logger: The underlying stdlib logger.
            dimensions: Key/value pairs attached to every record.
            prefix: Text prepended to every message.
        """
        super().__init__(logger, dict(dimensions or {}))
        self.dimensions: Dict[str, Any] = dict(dimensions or {})
        self.prefix = prefix

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Merge dimensions into ``extra`` and apply the prefix."""
        extra = dict(self.dimensions)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        if self.prefix:
            msg = f"{self.prefix}{msg}"
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions."""
        merged = {**self.dimensions, **{k: v for k, v in dimensions.items() if v is not None}}
        return ContextualLogger(self.logger, merged, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger that prepends ``prefix`` to every message."""
        return ContextualLogger(self.logger, self.dimensions, f"{self.prefix}{prefix}")


class _TextFormatter(logging.Formatter):
    """Readable single-line formatter for local development."""

    _RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message"}

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        dims = {k: v for k, v in record.__dict__.items() if k not in self._RESERVED}
        if not dims:
            return base
        rendered = " ".join(f"{k}={v}" for k, v in sorted(dims.items()))
        return f"{base} [{rendered}]"


class LoggerConfigurator:
    """Builds configured contextual loggers."""

    _configured: set[str] = set()

    @staticmethod
    def _handler() -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        if settings.LOCAL_DEVELOPMENT:
            handler.setFormatter(
                _TextFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
        else:
            handler.setFormatter(
                JsonFormatter(
                    "%(asctime)s %(levelname)s %(name)s %(message)s",
                    rename_fields={"levelname": "level", "asctime": "timestamp"},
                )
            )
        return handler

    @classmethod
    def configure_logger(
        cls, name: str, dimensions: Optional[Dict[str, Any]] = None
    ) -> ContextualLogger:
        """Configure (once per name) and return a contextual logger.

        Args:
            name: Logger name, usually the dotted module path.
            dimensions: Initial dimensions for the returned logger.

        Returns:
            A ContextualLogger bound to ``name``.
        """
        base = logging.getLogger(name)
        if name not in cls._configured:
            base.handlers.clear()
            base.addHandler(cls._handler())
            base.setLevel(settings.LOG_LEVEL)
            base.propagate = False
            cls._configured.add(name)
        return ContextualLogger(base, dimensions)


logger = LoggerConfigurator.configure_logger("lorekeeper")
