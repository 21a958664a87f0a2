"""
Structured request logging with masking of credentials and contact details.

Each request produces a ``request_started`` and a ``request_completed`` JSON
line sharing a request id, which is echoed back in ``x-request-id``.
"""

import json
import logging
import re
import time
import traceback
import uuid
from typing import Any, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


# Field names whose values are never logged
SENSITIVE_FIELD_PATTERN = re.compile(
    r'password|token|api[_-]?key|secret|authorization|bearer|cookie|session',
    re.IGNORECASE,
)

# Contact details masked wherever they appear in string values
PII_PATTERNS = [
    (re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'), '[EMAIL]'),
    (re.compile(r'\+?\d[\d\s().-]{6,}\d'), '[PHONE]'),
]

# Paths polled by load balancers
QUIET_PATHS = ('/health', '/api/v1/health')


def mask_sensitive_data(data: Any, depth: int = 0, max_depth: int = 10) -> Any:
    """
    Recursively mask sensitive fields and contact details.

    Args:
        data: Data structure to mask
        depth: Current recursion depth
        max_depth: Maximum recursion depth

    Returns:
        Data structure with sensitive values masked
    """
    if depth > max_depth:
        return "[MAX_DEPTH_EXCEEDED]"

    if isinstance(data, dict):
        return {
            key: "[REDACTED]" if SENSITIVE_FIELD_PATTERN.search(str(key))
            else mask_sensitive_data(value, depth + 1, max_depth)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive_data(item, depth + 1, max_depth) for item in data]
    if isinstance(data, str):
        for pattern, replacement in PII_PATTERNS:
            data = pattern.sub(replacement, data)
        return data
    return data


def mask_headers(headers: dict) -> dict:
    """Mask credential headers, keeping the authorization scheme visible."""
    masked = {}
    for key, value in headers.items():
        if not SENSITIVE_FIELD_PATTERN.search(key):
            masked[key] = value
        elif key.lower() == 'authorization' and ' ' in value:
            masked[key] = f"{value.split(' ', 1)[0]} [REDACTED]"
        else:
            masked[key] = "[REDACTED]"
    return masked


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Structured logging middleware.

    Features:
    - JSON request/response lines with timing
    - Request id propagation
    - Optional masked request and response bodies
    """

    def __init__(
        self,
        app: ASGIApp,
        log_request_body: bool = False,
        log_response_body: bool = False,
        max_body_size: int = 1024,
    ):
        super().__init__(app)
        self.log_request_body = log_request_body
        self.log_response_body = log_response_body
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get('x-request-id') or uuid.uuid4().hex
        request.state.request_id = request_id

        if request.url.path in QUIET_PATHS:
            response = await call_next(request)
            response.headers['x-request-id'] = request_id
            return response

        started = time.perf_counter()
        request_log = {
            'event': 'request_started',
            'request_id': request_id,
            'method': request.method,
            'path': request.url.path,
            'query_params': mask_sensitive_data(dict(request.query_params)),
            'headers': mask_headers(dict(request.headers)),
        }
        if self.log_request_body and request.method in ('POST', 'PUT', 'PATCH'):
            request_log['body'] = await self._read_body(request)
        logger.info(json.dumps(request_log, default=str))

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        response_log = {
            'event': 'request_completed',
            'request_id': request_id,
            'method': request.method,
            'path': request.url.path,
            'status_code': response.status_code,
            'duration_ms': duration_ms,
        }
        if self.log_response_body and response.headers.get('content-type', '').startswith('application/json'):
            response, response_log['body'] = await self._capture_body(response)

        if response.status_code >= 500:
            logger.error(json.dumps(response_log, default=str))
        elif response.status_code >= 400:
            logger.warning(json.dumps(response_log, default=str))
        else:
            logger.info(json.dumps(response_log, default=str))

        response.headers['x-request-id'] = request_id
        return response

    async def _read_body(self, request: Request) -> Any:
        if 'application/json' not in request.headers.get('content-type', ''):
            return None
        body = await request.body()
        if len(body) > self.max_body_size:
            return {'_truncated': True, '_size': len(body)}
        try:
            return mask_sensitive_data(json.loads(body))
        except ValueError:
            return {'_unparseable': True}

    async def _capture_body(self, response: Response) -> tuple[Response, Any]:
        chunks = [chunk async for chunk in response.body_iterator]
        body = b''.join(chunks)
        captured = Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )
        if len(body) > self.max_body_size:
            return captured, {'_truncated': True, '_size': len(body)}
        try:
            return captured, mask_sensitive_data(json.loads(body))
        except ValueError:
            return captured, {'_unparseable': True}


class StructuredFormatter(logging.Formatter):
    """Formats log records as single JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if hasattr(record, 'request_id'):
            log_data['request_id'] = record.request_id
        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info),
            }
        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = "INFO", json_logs: bool = True):
    """
    Configure application-wide logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Whether to format logs as JSON
    """
    level = getattr(logging, log_level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    if json_logs:
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
