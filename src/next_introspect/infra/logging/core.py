from __future__ import annotations

"""
Logging Bootstrap.

Configures the root logger once per process. Records are pushed through a
QueueHandler and written by a QueueListener thread, so a slow log file
never stalls a directory scan. Reconfiguration (e.g. when watch mode
restarts with new flags) is explicit through 'force'.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from next_introspect.infra.logging.config import _LEVEL_MAP, LoggingConfig
from next_introspect.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_next_introspect_configured"
_QUEUE_LISTENER_ATTR: str = "_next_introspect_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the application's handlers to the root logger.

    Idempotent: a second call is a no-op unless force is set. If handler
    construction fails, a plain stderr handler is installed instead so
    diagnostics are never lost silently.

    Args:
        cfg: Logging settings.
        force: Tear down previously installed handlers and rebuild.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    try:
        level_int = _parse_level(cfg.level)
        root.setLevel(level_int)
        shutdown_logging()

        handlers = _build_handlers(cfg, level_int)
        if not handlers:
            setattr(root, _CONFIGURED_FLAG_ATTR, True)
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
        listener.start()
        root.addHandler(queue_handler)

        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
        atexit.register(_safe_stop_listener, listener)
        return root

    except (OSError, ValueError, TypeError) as e:
        _install_emergency_handler(root)
        root.warning(f"Logging setup failed ({e}); using emergency console handler.")
        return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush and remove every handler installed by configure_logging.

    Handlers owned by someone else are left in place.
    """
    root = logging.getLogger()
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _build_handlers(cfg: LoggingConfig, level_int: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if cfg.console:
        handlers.append(_create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))
    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh is not None:
            handlers.append(fh)
    return handlers


def _install_emergency_handler(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
    root.setLevel(logging.INFO)
    root.addHandler(
        _create_console_handler(logging.INFO, logging.Formatter("FALLBACK | %(levelname)s | %(message)s"))
    )
    setattr(root, _CONFIGURED_FLAG_ATTR, True)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener; tolerates a listener that was already stopped."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
