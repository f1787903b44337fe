import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from core.auth import get_current_user
from core.errors import ApiError, InputValidationError
from models.image_edit import ImageEditRequest, ImageEditResponse, collect_input_violations
from models.user import CurrentUser
from services.ai_gateway_service import AIGatewayService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/edit-image", tags=["image-edit"])


def get_ai_gateway_service(settings: Settings = Depends(get_settings)) -> AIGatewayService:
    return AIGatewayService(settings)


async def read_edit_request(request: Request, settings: Settings) -> ImageEditRequest:
    """Parse the JSON body and validate it, collecting every violation."""
    try:
        body = await request.json()
    except ValueError:
        raise InputValidationError(["request body must be a JSON object"])

    # Arrays and scalars carry neither field
    if not isinstance(body, dict):
        body = {}

    image_data = body.get("imageData")
    instruction = body.get("instruction")
    violations = collect_input_violations(
        image_data,
        instruction,
        max_image_data_length=settings.MAX_IMAGE_DATA_LENGTH,
        min_instruction_length=settings.MIN_INSTRUCTION_LENGTH,
        max_instruction_length=settings.MAX_INSTRUCTION_LENGTH,
    )
    if violations:
        raise InputValidationError(violations)

    return ImageEditRequest(image_data=image_data, instruction=instruction)


@router.post("", response_model=ImageEditResponse, response_model_by_alias=True)
async def edit_image(
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    gateway: AIGatewayService = Depends(get_ai_gateway_service),
):
    """Edit an image by forwarding the instruction and image to the AI gateway"""
    logger.info("Authenticated user: %s", user.id)

    try:
        edit_request = await read_edit_request(request, settings)
        logger.info("Received edit request from user: %s", user.id)

        edited_image = await gateway.edit_image(edit_request.image_data, edit_request.instruction)
        logger.info("AI response received for user: %s", user.id)

    except InputValidationError as e:
        logger.warning("Validation errors: %s", e.details)
        raise
    except ApiError as e:
        logger.error("Error in edit-image: %s", e.message)
        raise
    except Exception as e:
        logger.exception("Unexpected error in edit-image")
        return JSONResponse(
            status_code=500,
            content={"error": str(e) or "Unknown error"},
            headers=settings.cors_headers,
        )

    return ImageEditResponse(edited_image=edited_image)
