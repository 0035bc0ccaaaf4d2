"""
Process entrypoint: ``python -m postboard`` or the ``postboard`` script.

Builds the application from environment settings and serves it with uvicorn
on the configured host and port.
"""

import logging

import uvicorn

from postboard.api.main import create_app
from postboard.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
