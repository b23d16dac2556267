"""Run the API with uvicorn: ``python -m reparto``."""
from __future__ import annotations

import logging

import uvicorn

from reparto.app import create_app
from reparto.core.config import get_settings
from reparto.core.log import configure_logging

logger = logging.getLogger("reparto")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("API funcionando en http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
