import logging.config
from typing import Literal

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SERVER_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
CLI_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _server_loggers(level: str) -> dict:
    # uvicorn installs its own handlers, keep its records on our console only
    return {
        name: {"level": level, "handlers": ["console"], "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    }


def _cli_loggers(level: str) -> dict:
    # httpx logs every request at INFO; only show it when debugging the client
    transport_level = "DEBUG" if level == "DEBUG" else "WARNING"
    return {name: {"level": transport_level} for name in ("httpx", "httpcore")}


def configure_logging(level: str = "INFO", target: Literal["server", "cli"] = "server") -> None:
    """Install the console logging used by the API process or by the ``portal`` CLI.

    The server writes timestamped lines and takes over uvicorn's loggers. The
    CLI keeps stdout for command output, so its log lines go to stderr.
    """
    level = level.upper()
    if level not in LEVELS:
        raise ValueError(f"unknown log level: {level}")

    if target == "cli":
        handler = {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        }
        fmt, loggers = CLI_FORMAT, _cli_loggers(level)
    else:
        handler = {"class": "logging.StreamHandler", "formatter": "default"}
        fmt, loggers = SERVER_FORMAT, _server_loggers(level)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": fmt}},
            "handlers": {"console": handler},
            "root": {"level": level, "handlers": ["console"]},
            "loggers": loggers,
        }
    )
