"""
Structured Logging
==================
structlog integration for planner events.

Usage:
    from pair_rotation.utils.structured_logging import get_structured_logger

    log = get_structured_logger("pair_rotation.solver.planner")
    log.info("round_planned", pairs=3, forgotten=1)
"""
import logging
from typing import Any

import structlog
import structlog.contextvars
import structlog.stdlib


def configure_structlog(json_output: bool = False, level: int = logging.INFO) -> None:
    """
    Configure structlog for the application.

    Events are rendered by structlog and handed to the stdlib logger of the
    same name, so they reach the handlers installed by setup_logging.

    Args:
        json_output: If True, output JSON logs (for scheduled jobs).
                    If False, use colored console output (for development).
        level: Minimum level for emitted events.
    """
    if json_output:
        renderer = structlog.processors.JSONRenderer()
        timestamper = structlog.processors.TimeStamper(fmt="iso")
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
        timestamper = structlog.processors.TimeStamper(fmt="%H:%M:%S")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_structured_logger(name: str) -> Any:
    """
    Get a structured logger bound to a component name.

    Always wraps the stdlib logger of the same name, so events only reach
    the handlers the host installed, even if configure_structlog was never
    called.

    Args:
        name: Logger name (e.g., "pair_rotation.solver.planner")
    """
    return structlog.wrap_logger(logging.getLogger(name), component=name)


def bind_context(**kwargs) -> None:
    """
    Bind context variables for all subsequent log calls.

    Args:
        **kwargs: Context values (e.g., run_id="abc123")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
