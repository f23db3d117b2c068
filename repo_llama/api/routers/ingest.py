"""
Ingestion API endpoint.

Routes:
- POST /ingest - Walk, chunk and embed a local repository into a context

Dependencies: repo_llama.application.services.ingestion_service
System role: Ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from repo_llama.api.deps import get_ingestion_service
from repo_llama.api.error_handling import handle_api_errors
from repo_llama.application.services import IngestionService
from repo_llama.models.ingest import IngestRequest, IngestResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ingest", tags=["ingest"])


@router.post("", response_model=IngestResponse)
@handle_api_errors
async def ingest_repository(
    request: IngestRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    """
    Ingest a local repository.

    Args:
        request: IngestRequest with path and optional context name
        ingestion_service: Injected IngestionService

    Returns:
        IngestResponse: Context name, file and chunk counts, output path

    Raises:
        HTTPException(400): Missing or nonexistent path
        HTTPException(502): Embedding service failure (nothing saved)
    """
    logger.info("Ingestion requested", extra={"path": request.path, "context_name": request.name})
    return await ingestion_service.ingest(request.path, request.name)
