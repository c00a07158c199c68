"""Prometheus metrics exposition endpoint."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..config import settings
from ..utils.metrics import metrics_response

router = APIRouter(tags=["monitoring"])


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    """
    Expose Prometheus metrics in the text exposition format.

    Status Codes:
        200: Metrics payload
        404: Metrics disabled via ``METRICS_ENABLED=false``
    """
    if not settings.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="metrics disabled")
    payload, content_type = metrics_response()
    return Response(content=payload, media_type=content_type)
