import json
import logging
import time
from typing import Callable
from fastapi import Request

from .config import settings

logger = logging.getLogger("captcha")
logger.setLevel(settings.log_level.upper())
_handler = logging.StreamHandler()
_formatter = logging.Formatter("%(message)s")
_handler.setFormatter(_formatter)
logger.addHandler(_handler)

def log_event(event: str, level: int = logging.INFO, **fields) -> None:
    record = {"event": event, **fields}
    logger.log(level, json.dumps(record, default=str))

async def log_middleware(request: Request, call_next: Callable):
    t0 = time.perf_counter()
    response = await call_next(request)
    latency_ms = (time.perf_counter() - t0) * 1000
    log_event(
        "http",
        route=request.url.path,
        status=response.status_code,
        latency_ms=round(latency_ms, 2),
        method=request.method,
    )
    return response
