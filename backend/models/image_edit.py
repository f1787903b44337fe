from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List
import re

IMAGE_DATA_PREFIX = re.compile(r"^data:image/(png|jpeg|jpg|webp);base64,")

DEFAULT_MAX_IMAGE_DATA_LENGTH = 10_000_000
DEFAULT_MIN_INSTRUCTION_LENGTH = 3
DEFAULT_MAX_INSTRUCTION_LENGTH = 2000

# Characters a browser's String.prototype.trim removes. Differs from
# str.strip(): includes U+FEFF, excludes U+001C-U+001F and U+0085.
CLIENT_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def client_length(text: str) -> int:
    """Length in UTF-16 code units, as the browser client counts it."""
    return len(text.encode("utf-16-le")) // 2


def describe_image_limit(max_length: int) -> str:
    if max_length % 1_000_000 == 0:
        return f"{max_length // 1_000_000}MB"
    return f"{max_length} characters"


def collect_input_violations(
    image_data: Any,
    instruction: Any,
    max_image_data_length: int = DEFAULT_MAX_IMAGE_DATA_LENGTH,
    min_instruction_length: int = DEFAULT_MIN_INSTRUCTION_LENGTH,
    max_instruction_length: int = DEFAULT_MAX_INSTRUCTION_LENGTH,
) -> List[str]:
    """Run every edit input check and return all violations found."""
    errors: List[str] = []

    if not isinstance(image_data, str):
        errors.append("imageData must be a string")
    elif len(image_data) == 0:
        errors.append("imageData cannot be empty")
    elif client_length(image_data) > max_image_data_length:
        errors.append(f"imageData too large (max {describe_image_limit(max_image_data_length)})")
    elif not IMAGE_DATA_PREFIX.match(image_data):
        errors.append("imageData must be a valid base64 image (png, jpeg, jpg, or webp)")

    if not isinstance(instruction, str):
        errors.append("instruction must be a string")
    else:
        trimmed_length = client_length(instruction.strip(CLIENT_WHITESPACE))
        if trimmed_length < min_instruction_length:
            errors.append(f"instruction must be at least {min_instruction_length} characters")
        elif trimmed_length > max_instruction_length:
            errors.append(f"instruction must be less than {max_instruction_length} characters")

    return errors


class ImageEditRequest(BaseModel):
    """A validated edit request."""
    model_config = ConfigDict(populate_by_name=True)

    image_data: str = Field(alias="imageData")  # data URI
    instruction: str


class ImageEditResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    edited_image: str = Field(alias="editedImage")
    message: str = "Image edited successfully"
