"""Category read endpoints."""

from fastapi import APIRouter, Depends

from ledger.api.deps import get_category_repository
from ledger.repositories.category import CategoryRepository
from ledger.schemas.category import CategoryListResult, CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=CategoryListResult,
    summary="List categories",
)
async def list_categories(
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> CategoryListResult:
    """List every category, alphabetically. Categories are created by transactions."""
    categories = await category_repo.get_all()
    return CategoryListResult(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        total=len(categories),
    )
