"""
Logging setup for processes embedding the promoter client.

The library only emits structlog events (loggers "api" and "cli"); it never
installs handlers itself. A process calls setup_logging once at startup:

    from promoter.logging_config import setup_logging
    setup_logging("cli")   # api.log + cli.log
    setup_logging("app")   # api.log only

Every process also gets console output on stderr and an errors.log that
collects ERROR+ records from all loggers.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_CATEGORIES = {
    "api": "api.log",
    "cli": "cli.log",
}

PROCESS_CATEGORIES = {
    "cli": ["api", "cli"],
    "app": ["api"],
}

_initialized = False


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.FileHandler:
    handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _attach_category(category: str, logs_dir: Path, level: int, formatter: logging.Formatter) -> None:
    cat_logger = logging.getLogger(category)
    cat_logger.setLevel(level)
    if not cat_logger.handlers:
        cat_logger.addHandler(_file_handler(logs_dir / LOG_CATEGORIES[category], level, formatter))
    cat_logger.propagate = True


def _bridge_structlog() -> None:
    """Route structlog events through the stdlib handlers installed above."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging(
    component: str = "app",
    level: str = "INFO",
    logs_dir: Optional[Path] = None,
) -> None:
    """
    Install console and file handlers for one process. Runs once per process.

    Args:
        component: "cli" or "app"; selects the category files.
                   Unknown components get every category.
        level: DEBUG, INFO, WARNING or ERROR (unknown names mean INFO).
        logs_dir: Directory for log files, ./logs by default.
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    target_dir = Path(logs_dir) if logs_dir is not None else Path.cwd() / "logs"
    target_dir.mkdir(parents=True, exist_ok=True)

    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    # stderr keeps command output on stdout clean
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(log_level)
    console.setFormatter(formatter)
    root.addHandler(console)
    root.addHandler(_file_handler(target_dir / "errors.log", logging.ERROR, formatter))

    categories: List[str] = PROCESS_CATEGORIES.get(component, list(LOG_CATEGORIES))
    for category in categories:
        _attach_category(category, target_dir, log_level, formatter)

    _bridge_structlog()

    structlog.get_logger(component).info(
        "logging_initialized",
        component=component,
        categories=categories,
        level=level,
    )


def reset_logging() -> None:
    """Drop handlers installed by setup_logging so it can run again."""
    global _initialized
    _initialized = False

    for name in [None, *LOG_CATEGORIES]:
        target = logging.getLogger(name)
        for handler in list(target.handlers):
            target.removeHandler(handler)
            handler.close()

    structlog.reset_defaults()
