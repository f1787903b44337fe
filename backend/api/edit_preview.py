from fastapi import APIRouter

from models.edit_preview import EditPreviewRequest, EditPreviewResponse
from services.edit_preview import parse_edit_request, preview_message

router = APIRouter(prefix="/edit-preview", tags=["image-edit"])


@router.post("", response_model=EditPreviewResponse, response_model_exclude_none=True)
async def preview_edit(payload: EditPreviewRequest):
    """Show the task list an instruction maps to. Nothing is sent upstream."""
    return EditPreviewResponse(
        message=preview_message(payload.instruction),
        plan=parse_edit_request(payload.instruction),
    )
