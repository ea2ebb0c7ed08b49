"""Entry point: ``python -m people_service.main`` or the ``people-service`` script."""

from __future__ import annotations

import sys
from typing import NoReturn


def main() -> NoReturn:
    """Run the API server with uvicorn."""
    import uvicorn

    from people_service.core.settings import get_app_settings, get_logging_settings
    from people_service.infra.logging import setup_logging

    settings = get_app_settings()
    log_settings = get_logging_settings()
    setup_logging(log_settings)

    uvicorn.run(
        "people_service.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=settings.debug,
        log_level=log_settings.level.lower(),
        log_config=None,
    )
    sys.exit(0)


if __name__ == "__main__":
    main()
