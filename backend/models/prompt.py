from pydantic import BaseModel
from typing import List


class PromptCategory(BaseModel):
    category: str
    icon: str
    prompts: List[str]


class PromptCatalogResponse(BaseModel):
    categories: List[PromptCategory]
