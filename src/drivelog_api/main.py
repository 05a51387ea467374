import logging
import os

# hypercorn logging format
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="[%(asctime)s] [%(process)d] [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S %z",
)

from drivelog_api.app import app  # noqa: E402

__all__ = ["app"]
