from fastapi import APIRouter, Query
from typing import Optional

from core.errors import NotFoundError
from models.prompt import PromptCatalogResponse
from services.prompt_catalog import list_categories

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("", response_model=PromptCatalogResponse)
async def get_prompts(category: Optional[str] = Query(default=None, description="Category name, e.g. 'Background'")):
    """List the predefined edit prompts, grouped by category"""
    categories = list_categories(category)
    if category is not None and not categories:
        raise NotFoundError(f"Unknown prompt category: {category}")
    return PromptCatalogResponse(categories=categories)
