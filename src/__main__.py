import logging

import uvicorn

from src.config import settings

logger = logging.getLogger("users_api")


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if settings.is_test:
        logger.info("APP_ENV=test; not starting the server")
        return

    uvicorn.run("src.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
