"""
API routes for the metadata service.

Defines the single read-only endpoint that extracts page metadata
for a URL. Uses FastAPI dependency injection for validation and
clean separation from business logic.
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_metadata_request, get_metadata_service
from app.api.schemas import ErrorResponse, MetadataRequest, MetadataResponse
from app.core.exceptions import BadRequestError, HostError
from app.core.logging import get_logger
from app.domain.metadata_service import MetadataService

logger = get_logger(__name__)

router = APIRouter(tags=["Metadata"])


@router.get(
    "/",
    response_model=MetadataResponse,
    status_code=status.HTTP_200_OK,
    summary="Extract page metadata",
    description=(
        "Fetches the page at the given URL and returns its title, "
        "description, keywords, language, icon and preview image."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid url or host"},
        500: {"model": ErrorResponse, "description": "Extraction failed"},
    },
)
async def get_metadata(
    request: MetadataRequest = Depends(get_metadata_request),
    service: MetadataService = Depends(get_metadata_service),
) -> MetadataResponse:
    """
    GET /?url=... extracts metadata for a given URL.

    Unreachable or failing hosts become 400 "Invalid host"; any other
    failure propagates to the global error boundary as a 500.
    """
    try:
        result = await service.extract(request.url)
    except HostError as exc:
        logger.warning("Host error: %s", exc.message)
        raise BadRequestError("Invalid host") from exc

    return MetadataResponse.from_result(result)
