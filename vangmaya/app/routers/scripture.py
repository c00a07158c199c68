"""
Scripture ingestion and reading router.

Provides REST endpoints for:
- Admin-gated ingestion of a scripture JSON document
- Chapter listing and chapter detail
- Verse retrieval with previous/next navigation
- Per-verse commentary listing and lookup by author

Ingestion validates the payload, normalizes it and persists two artifacts: a
timestamped raw copy and the canonical normalized document read by every other
endpoint here. Reading endpoints return 503 until a document has been ingested.

Example Usage:
    ```bash
    # Ingest a document
    curl -X POST http://localhost:8000/v1/scripture/ingest \\
      -H 'Content-Type: application/json' \\
      -d '{"admin_password": "...", "payload": {"chapters": {...}}}'

    # Read Bhagavad Gita 2.47 with navigation
    curl http://localhost:8000/v1/scripture/chapters/2/verses/47

    # Shankara's commentary on 2.47
    curl http://localhost:8000/v1/scripture/chapters/2/verses/47/commentaries/shankara
    ```
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ...scripture import (
    IngestionService,
    PersistenceError,
    decode_payload,
)
from ...scripture.models import Commentary
from ..config import settings
from ..dependencies.scripture import get_ingestion_service, get_scripture_service
from ..models import (
    ChapterDetail,
    ChapterSummary,
    CommentaryList,
    IngestFailure,
    IngestResponse,
    IngestSummaryModel,
    ValidationErrorItem,
    VerseDetail,
)
from ..services.scripture import ScriptureLookupError, ScriptureService
from ..utils.logging import get_logger
from ..utils.metrics import observe_ingestion
from ..utils.passwords import verify_admin_password

logger = get_logger(__name__)

router = APIRouter(prefix="/scripture", tags=["scripture"])

EPHEMERAL_WARNING = (
    "Filesystem writes may be ephemeral in this environment. "
    "Data may not persist across restarts or deployments."
)


def _failure(status_code: int, message: str, **fields) -> JSONResponse:
    body = IngestFailure(message=message, **fields)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/ingest",
    response_model=IngestResponse,
    responses={
        400: {"model": IngestFailure},
        401: {"model": IngestFailure},
        500: {"model": IngestFailure},
    },
)
async def ingest_scripture(
    request: Request,
    service: IngestionService = Depends(get_ingestion_service),
):
    """
    Validate, normalize and persist a scripture document.

    Request body:
        ```json
        {"admin_password": "<secret>", "payload": {"chapters": {...}}}
        ```

    Status Codes:
        200: Document persisted; body carries chapter/verse counts and artifact paths
        400: Invalid JSON, malformed envelope, or validation errors (full list)
        401: Wrong admin password
        500: Ingestion not configured, or the artifact store failed
    """
    admin_secret = settings.SCRIPTURE_ADMIN_SECRET
    if not admin_secret:
        return _failure(
            500,
            "Server is not configured for scripture ingestion "
            "(SCRIPTURE_ADMIN_SECRET is missing).",
        )

    try:
        body = decode_payload(await request.body())
    except ValueError:
        return _failure(400, "Invalid JSON body.")

    if not isinstance(body, dict) or "admin_password" not in body or "payload" not in body:
        return _failure(
            400, "Request body must be an object with admin_password and payload fields."
        )

    admin_password = body["admin_password"]
    if not isinstance(admin_password, str):
        return _failure(400, "admin_password must be a string.")

    if not verify_admin_password(admin_password, admin_secret):
        logger.warning("scripture_ingest_unauthorized")
        return _failure(401, "Unauthorized")

    try:
        outcome = await service.ingest(body["payload"])
    except PersistenceError as exc:
        observe_ingestion("partial_persistence" if exc.partial else "persistence_failed")
        return _failure(
            500,
            "Failed to write scripture data to the filesystem.",
            details=str(exc),
            partial=exc.partial,
        )

    if not outcome.ok or outcome.summary is None:
        observe_ingestion("rejected")
        return _failure(
            400,
            "Validation failed",
            errors=[ValidationErrorItem(**issue.as_dict()) for issue in outcome.errors],
        )

    observe_ingestion(
        "persisted",
        chapters=outcome.summary.chapters,
        verses=outcome.summary.verses,
    )
    return IngestResponse(
        summary=IngestSummaryModel(**outcome.summary.as_dict()),
        raw_path=outcome.raw_location or "",
        normalized_path=outcome.normalized_location or "",
        ephemeral_warning=EPHEMERAL_WARNING if settings.SCRIPTURE_FS_EPHEMERAL else None,
    )


@router.get("/chapters", response_model=list[ChapterSummary])
def list_chapters(
    service: ScriptureService = Depends(get_scripture_service),
) -> list[ChapterSummary]:
    """
    List chapters in numeric order.

    Chapter numbers need not be contiguous; each entry reports its verse count
    and first verse so clients can build a sparse navigation grid.
    """
    return service.list_chapters()


@router.get("/chapters/{chapter}", response_model=ChapterDetail)
def get_chapter(
    chapter: int,
    service: ScriptureService = Depends(get_scripture_service),
) -> ChapterDetail:
    """Return a chapter's title and sorted verse numbers."""
    try:
        return service.get_chapter(chapter)
    except ScriptureLookupError:
        raise HTTPException(status_code=404, detail="chapter not found") from None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/chapters/{chapter}/verses/{verse}", response_model=VerseDetail)
def get_verse(
    chapter: int,
    verse: int,
    service: ScriptureService = Depends(get_scripture_service),
) -> VerseDetail:
    """
    Retrieve a verse with its location stamp, languages and commentaries.

    ``navigation.previous``/``navigation.next`` cross chapter boundaries;
    both are null only for a document holding a single verse.

    Raises:
        HTTPException: 404 if the chapter or verse does not exist
    """
    try:
        return service.get_verse(chapter, verse)
    except ScriptureLookupError:
        raise HTTPException(status_code=404, detail="verse not found") from None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/chapters/{chapter}/verses/{verse}/commentaries", response_model=CommentaryList)
def list_commentaries(
    chapter: int,
    verse: int,
    service: ScriptureService = Depends(get_scripture_service),
) -> CommentaryList:
    """List every commentary on a verse."""
    try:
        return service.list_commentaries(chapter, verse)
    except ScriptureLookupError:
        raise HTTPException(status_code=404, detail="verse not found") from None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get(
    "/chapters/{chapter}/verses/{verse}/commentaries/{author_id}",
    response_model=Commentary,
)
def get_commentary(
    chapter: int,
    verse: int,
    author_id: str,
    service: ScriptureService = Depends(get_scripture_service),
) -> Commentary:
    """Return one author's commentary on a verse."""
    try:
        return service.get_commentary(chapter, verse, author_id)
    except ScriptureLookupError:
        raise HTTPException(status_code=404, detail="commentary not found") from None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
