from __future__ import annotations

import logging


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger("cybervault").setLevel(numeric)
    # httpx logs full request URLs at INFO, which would include query-string keys
    logging.getLogger("httpx").setLevel(logging.WARNING)
