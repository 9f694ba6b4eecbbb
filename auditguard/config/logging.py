# auditguard/config/logging.py

import json
import logging
from datetime import datetime, timezone

from auditguard.core.context import actor_id_ctx, correlation_id_ctx, read_only_depth_ctx


class JsonFormatter(logging.Formatter):
    def format(self, record):
        actor_id = actor_id_ctx.get()
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "correlation_id": correlation_id_ctx.get(),
            "actor_id": str(actor_id) if actor_id is not None else None,
            "read_only": read_only_depth_ctx.get() > 0,
        }
        return json.dumps(log_record)


def configure_logging(log_level: str):
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)
