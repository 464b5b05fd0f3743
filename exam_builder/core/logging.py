import logging

from exam_builder.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None):
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # uvicorn installs its own handlers; keep SQL echo out of the app log
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
