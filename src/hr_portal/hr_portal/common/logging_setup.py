from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=logging.getLevelName(level.upper()), format=_FORMAT)
    # requests/urllib3 are chatty at INFO when the webhook worker runs.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
