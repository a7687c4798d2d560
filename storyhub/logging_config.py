"""
Logging for the API: readable console output plus JSON log files.

Each record written while a request is being handled carries that request's
id, which is also returned to the client in the ``X-Request-ID`` header.
"""

import logging
import logging.config
import os
import uuid
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Request
from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "storyhub-api"
REQUEST_ID_HEADER = "X-Request-ID"
MAX_LOG_BYTES = 10 * 1024 * 1024

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    def filter(self, record):
        record.request_id = request_id_var.get() or "-"
        return True


class StoryHubJsonFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.utcnow().isoformat()
        log_record['level'] = record.levelname
        log_record['service'] = SERVICE_NAME
        log_record['request_id'] = getattr(record, 'request_id', '-')


def _rotating_file_handler(filename: str, level: str) -> Dict[str, Any]:
    return {
        'level': level,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': filename,
        'maxBytes': MAX_LOG_BYTES,
        'backupCount': 5,
        'formatter': 'json',
        'filters': ['request_id'],
    }


def build_logging_config(log_level: str = "INFO", log_file: Optional[str] = "logs/app.log") -> Dict[str, Any]:
    """dictConfig for the API; an empty log_file keeps logging on the console only"""
    handlers: Dict[str, Any] = {
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
            'filters': ['request_id'],
        },
    }
    if log_file:
        root, ext = os.path.splitext(log_file)
        handlers['file'] = _rotating_file_handler(log_file, 'INFO')
        handlers['error_file'] = _rotating_file_handler(f"{root}_errors{ext or '.log'}", 'ERROR')

    file_handlers = [name for name in handlers if name != 'console']

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'request_id': {'()': RequestIdFilter},
        },
        'formatters': {
            'json': {
                '()': StoryHubJsonFormatter,
                'format': '%(timestamp)s %(level)s %(name)s %(message)s'
            },
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s'
            },
        },
        'handlers': handlers,
        'loggers': {
            '': {
                'handlers': list(handlers),
                'level': log_level,
            },
            # Driver chatter only matters when something is wrong
            'pymongo': {'level': 'WARNING'},
            'motor': {'level': 'WARNING'},
            'uvicorn.access': {
                'handlers': file_handlers or ['console'],
                'level': 'INFO',
                'propagate': False
            },
        }
    }


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = "logs/app.log"):
    """Setup structured logging configuration"""
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    logging.config.dictConfig(build_logging_config(log_level.upper(), log_file))


async def add_request_id_middleware(request: Request, call_next):
    """Tag the request, its log records and its response with one id"""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.request_id = request_id
    token = request_id_var.set(request_id)

    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        request_id_var.reset(token)
