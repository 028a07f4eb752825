from __future__ import annotations

import logging
import sys

import structlog
from flask import g, has_request_context, request


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Set up structlog for the app and the client package.

    ``fmt`` is ``json`` for production or ``console`` for a readable
    development stream. The stdlib root logger follows the same level so
    Flask and SQLAlchemy messages are filtered alike.
    """
    log_level = logging.getLevelName(level.upper())
    renderer = (
        structlog.dev.ConsoleRenderer()
        if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

    logging.basicConfig(stream=sys.stdout, level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            add_request_context,
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


def add_request_context(logger, method_name, event_dict):
    # client-side events run outside any request
    if not has_request_context():
        return event_dict
    req_id = getattr(g, "request_id", None)
    if req_id:
        event_dict["request_id"] = req_id
    event_dict.setdefault("http_method", request.method)
    event_dict.setdefault("path", request.path)
    return event_dict
