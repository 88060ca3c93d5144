import logging

import colorlog

QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "asyncio", "asyncpg", "aiohttp")

LOG_FORMAT = (
    "%(asctime)s | %(log_color)s%(levelname)-8s%(reset)s | "
    "%(name)s | %(funcName)s:%(lineno)d | %(message)s"
)


def setup_logging(level: str = "INFO") -> None:
    formatter = colorlog.ColoredFormatter(
        fmt=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        },
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
