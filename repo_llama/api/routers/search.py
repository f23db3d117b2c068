"""
Search API endpoint.

Routes:
- POST /search - Top-k fragments of a context for a query

Dependencies: repo_llama.application.services.retrieval_service
System role: Similarity search HTTP API
"""

from fastapi import APIRouter, Depends

from repo_llama.api.deps import get_retrieval_service
from repo_llama.api.error_handling import handle_api_errors
from repo_llama.application.services import RetrievalService
from repo_llama.models.search import SearchRequest, SearchResponse

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
@handle_api_errors
async def search(
    request: SearchRequest,
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """
    Search a context.

    Raises:
        HTTPException(400): Missing query or context name
        HTTPException(404): Unknown context
        HTTPException(502): Embedding service failure
    """
    results = await retrieval_service.search(request.query, request.context_name, request.k)
    return SearchResponse(results=results)
