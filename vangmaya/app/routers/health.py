"""
Health check router for API uptime monitoring.

The endpoint answers without touching the scripture artifacts, so it stays
responsive even before the first ingestion or when the data directory is
unreadable.

Example Usage:
    ```bash
    curl http://localhost:8000/v1/healthz
    # Response: {"ok": true}
    ```
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz", response_model=dict[str, bool])
def healthz() -> dict[str, bool]:
    """
    Health check endpoint for liveness probes.

    Returns:
        Dictionary with single "ok" key set to True

    Status Codes:
        200: API is responsive
    """
    return {"ok": True}
