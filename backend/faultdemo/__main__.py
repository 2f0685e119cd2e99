import logging

import uvicorn

from faultdemo import config
from faultdemo.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging()
    logger.info("Server running on http://%s:%d", config.host(), config.port())
    uvicorn.run(
        "faultdemo.main:app",
        host=config.host(),
        port=config.port(),
        log_level=config.log_level().lower(),
    )


if __name__ == "__main__":
    main()
