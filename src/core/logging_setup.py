import logging
import os

NOISY_LOGGERS = [
    # HTTP stack logs every request/connection at INFO/DEBUG
    "httpx",
    "httpcore",
]


def setup_logging(verbose_count: int, quiet_count: int) -> None:
    """Configure root logging level and tame third-party noise.
    - Root level: INFO (default), DEBUG with -v, ERROR with -q.
    - httpx/httpcore: kept at WARNING unless COLLABKIT_DEBUG_THIRDPARTY=1.
    """
    if quiet_count >= 1:
        root_level = logging.ERROR
    elif verbose_count >= 1:
        root_level = logging.DEBUG
    else:
        root_level = logging.INFO

    logging.basicConfig(level=root_level, format="%(levelname)s: %(message)s")
    logging.getLogger().setLevel(root_level)

    allow_thirdparty_debug = os.getenv("COLLABKIT_DEBUG_THIRDPARTY", "") == "1"
    if not allow_thirdparty_debug:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
