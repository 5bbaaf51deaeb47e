import time
from typing import Optional

from fastapi.responses import JSONResponse

from api.metrics import COMMANDS_TOTAL, REQUEST_LATENCY_SECONDS, REQUESTS_TOTAL
from greedy.models import CommandResult

STATUS_BY_ERROR = {
    "NotFoundError": 404,
    "ValidationError": 400,
    "MissingTargetError": 400,
    "UnknownIntentError": 400,
    "UpstreamError": 502,
    "InternalError": 500,
}


def record_request(endpoint: str, status: str, started: float) -> None:
    REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - started)


def result_response(
    result: CommandResult,
    endpoint: str,
    started: float,
    intent: Optional[str] = None,
) -> JSONResponse:
    """Serialize a CommandResult with the HTTP status matching its error kind."""
    status = "ok" if result.success else "error"
    if intent:
        COMMANDS_TOTAL.labels(intent=intent, status="success" if result.success else "failure").inc()
    record_request(endpoint, status, started)
    code = 200 if result.success else STATUS_BY_ERROR.get(result.error or "", 500)
    return JSONResponse(status_code=code, content=result.model_dump(mode="json"))
