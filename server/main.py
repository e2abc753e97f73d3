"""Entry point: ``python main.py`` or ``uvicorn main:app``."""
import uvicorn
import logging
from api.app import create_app
from config.settings import settings

logger = logging.getLogger(__name__)

app = create_app()


def main():
    logger.info(
        f"SchoolOps server on http://{settings.HOST}:{settings.PORT} "
        f"(docs at /docs, model {settings.LLM_MODEL}, auth {settings.AUTH_MODE})"
    )
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
