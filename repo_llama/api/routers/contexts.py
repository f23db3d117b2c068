"""
Context management API endpoints.

Routes:
- GET /contexts - List stored contexts
- DELETE /contexts - Delete a context by name

Dependencies: repo_llama.application.services.context_service
System role: Context management HTTP API
"""

from fastapi import APIRouter, Depends

from repo_llama.api.deps import get_context_service
from repo_llama.api.error_handling import handle_api_errors
from repo_llama.application.services import ContextService
from repo_llama.models.context import ContextInfo, DeleteContextRequest, DeleteContextResponse

router = APIRouter(prefix="/contexts", tags=["contexts"])


@router.get("", response_model=list[ContextInfo])
@handle_api_errors
async def list_contexts(
    context_service: ContextService = Depends(get_context_service),
) -> list[ContextInfo]:
    """List all stored contexts."""
    return await context_service.list_contexts()


@router.delete("", response_model=DeleteContextResponse)
@handle_api_errors
async def delete_context(
    request: DeleteContextRequest,
    context_service: ContextService = Depends(get_context_service),
) -> DeleteContextResponse:
    """
    Delete a context.

    Raises:
        HTTPException(400): Missing name
        HTTPException(404): Unknown context
    """
    deleted = await context_service.delete_context(request.name)
    return DeleteContextResponse(status="success", deleted=deleted)
