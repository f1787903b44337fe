from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union


class EditTask(BaseModel):
    action: str
    value: Optional[Union[int, str]] = None
    filter: Optional[str] = None
    style: Optional[str] = None
    description: Optional[str] = None


class EditPlan(BaseModel):
    edit_tasks: List[EditTask]


class EditPreviewRequest(BaseModel):
    instruction: str = Field(..., min_length=1)


class EditPreviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    plan: EditPlan = Field(alias="json")
