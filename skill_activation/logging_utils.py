"""Structured logging to stderr with per-invocation session context."""
import logging
import sys

import structlog


def bind_session(session_id: str | None) -> None:
    """Attach the host session id to every log line of this invocation."""
    structlog.contextvars.clear_contextvars()
    if session_id:
        structlog.contextvars.bind_contextvars(session_id=session_id)


def configure_logging(log_level: str = "WARNING") -> None:
    """Configure structlog and stdlib logging. Call once at startup.

    Everything is printed to stderr: stdout carries the report the host
    reads back as context, so no log line may land there.
    """
    level = getattr(logging, log_level, logging.WARNING)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False)
            if log_level == "DEBUG"
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# Convenience: hook events with consistent names
def log_hook_start(
    logger: structlog.stdlib.BoundLogger,
    project_dir: str,
    prompt: str,
) -> None:
    excerpt = prompt[:200] + "..." if len(prompt) > 200 else prompt
    logger.info("hook_start", project_dir=project_dir, prompt=excerpt)


def log_skill_matched(
    logger: structlog.stdlib.BoundLogger,
    skill_name: str,
    match_type: str,
    priority: str,
) -> None:
    logger.debug("skill_matched", skill=skill_name, match_type=match_type, priority=priority)


def log_hook_end(
    logger: structlog.stdlib.BoundLogger,
    context_identity: str,
    matched: list[str],
    loaded: list[str],
) -> None:
    logger.info(
        "hook_end",
        repository=context_identity,
        matched=matched,
        loaded=loaded,
    )
