# storefront/utils/logging.py
import logging
import sys

from storefront.utils.settings import LOG_LEVEL

_root = logging.getLogger("storefront")
_root.setLevel(LOG_LEVEL)

if not _root.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    _root.addHandler(handler)

# uvicorn installs its own root handlers; avoid double lines
_root.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return _root
    if name.startswith("storefront"):
        return logging.getLogger(name)
    return logging.getLogger(f"storefront.{name}")
