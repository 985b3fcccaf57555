import logging
import sys
from contextvars import ContextVar
from typing import Optional

from pythonjsonlogger import jsonlogger
from app.core.config import Settings

# set per request by RequestIdMiddleware; read by every log record
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True


def configure_logging(settings: Settings) -> None:
    """
    JSON logs on stdout. Each record carries the service name, the
    environment, and the id of the request that triggered the policy
    decision or validation.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # clear handlers if reloaded
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    fmt = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(request_id)s %(message)s",
        rename_fields={"levelname": "level", "name": "logger"},
        static_fields={"service": settings.app_name, "environment": settings.environment},
    )
    handler.setFormatter(fmt)
    root.addHandler(handler)

    for name in ("app.policies", "app.services"):
        logging.getLogger(name).setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)
