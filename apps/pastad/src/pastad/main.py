from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from pastad.config import Settings
from pastad.http import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv()
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    settings.ensure_dirs()

    logger.info("Serving pastas from %s on %s:%s", settings.pasta_path, settings.app_host, settings.app_port)
    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    main()
