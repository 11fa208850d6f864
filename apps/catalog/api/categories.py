from typing import List
from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from framework.config import settings
from framework.middleware.validation_md import INT32_MAX
from framework.problem_details import problem_response
from framework.repository.options import RemoveStrategy
from ..schemas import CategoryCreate, CategoryPatch, CategoryRead, CategoryUpdate, ProductRead
from ..service import CategoryService
from .common import NO_CONTENT, NOT_FOUND, key_mismatch, no_content
from .deps import get_category_service, get_remove_strategy

router = APIRouter()

@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CategoryRead,
    name="create_category",
)
async def create_category(
    payload: CategoryCreate,
    request: Request,
    response: Response,
    service: CategoryService = Depends(get_category_service)
):
    """Create a category; Location points at the new resource."""
    category = await service.create(payload.to_entity())
    response.headers["Location"] = str(request.url_for("get_category_by_id", category_id=category.id))
    return CategoryRead.from_entity(category)

@router.get("", response_model=List[CategoryRead], name="get_categories", responses=NO_CONTENT)
async def get_categories(
    response: Response,
    limit: int = Query(default=settings.DEFAULT_ITEMS_PER_PAGE, ge=1, le=settings.MAX_ITEMS_PER_PAGE),
    offset: int = Query(default=0, ge=0, le=INT32_MAX),
    service: CategoryService = Depends(get_category_service)
):
    """List visible categories by ascending id."""
    categories, total = await service.list_page(limit=limit, offset=offset)
    if not categories:
        return no_content()

    response.headers["X-Total-Count"] = str(total)
    return CategoryRead.from_entities(categories)

@router.get("/{category_id}", response_model=CategoryRead, name="get_category_by_id", responses=NOT_FOUND)
async def get_category_by_id(
    request: Request,
    category_id: int = Path(ge=1, le=INT32_MAX),
    service: CategoryService = Depends(get_category_service)
):
    category = await service.get(category_id)
    if category is None:
        return problem_response(request, status.HTTP_404_NOT_FOUND)
    return CategoryRead.from_entity(category)

@router.get(
    "/{category_id}/products",
    response_model=List[ProductRead],
    name="get_category_products",
    responses=NO_CONTENT,
)
async def get_category_products(
    category_id: int = Path(ge=1, le=INT32_MAX),
    limit: int = Query(default=settings.DEFAULT_ITEMS_PER_PAGE, ge=1, le=settings.MAX_ITEMS_PER_PAGE),
    offset: int = Query(default=0, ge=0, le=INT32_MAX),
    service: CategoryService = Depends(get_category_service)
):
    """List visible products of a visible category by ascending product id."""
    products = await service.list_products(category_id, limit=limit, offset=offset)
    if not products:
        return no_content()
    return ProductRead.from_entities(products)

@router.put("/{category_id}", response_model=CategoryRead, name="update_category_by_id", responses=NOT_FOUND)
async def update_category_by_id(
    payload: CategoryUpdate,
    request: Request,
    category_id: int = Path(ge=1, le=INT32_MAX),
    service: CategoryService = Depends(get_category_service)
):
    mismatch = key_mismatch(request, category_id, payload.id)
    if mismatch is not None:
        return mismatch

    category = await service.update(category_id, payload.to_entity())
    if category is None:
        return problem_response(request, status.HTTP_404_NOT_FOUND)
    return CategoryRead.from_entity(category)

@router.patch("/{category_id}", response_model=CategoryRead, name="patch_category_by_id", responses=NOT_FOUND)
async def patch_category_by_id(
    payload: CategoryPatch,
    request: Request,
    category_id: int = Path(ge=1, le=INT32_MAX),
    service: CategoryService = Depends(get_category_service)
):
    """Partial update: only fields present in the body are applied."""
    mismatch = key_mismatch(request, category_id, payload.id)
    if mismatch is not None:
        return mismatch

    category = await service.update(category_id, payload.to_entity())
    if category is None:
        return problem_response(request, status.HTTP_404_NOT_FOUND)
    return CategoryRead.from_entity(category)

@router.delete("/{category_id}", response_model=CategoryRead, name="delete_category_by_id", responses=NOT_FOUND)
async def delete_category_by_id(
    request: Request,
    category_id: int = Path(ge=1, le=INT32_MAX),
    strategy: RemoveStrategy = Depends(get_remove_strategy),
    service: CategoryService = Depends(get_category_service)
):
    """Remove with the configured strategy (delete or hide); returns the removed category."""
    category = await service.remove(category_id, strategy)
    if category is None:
        return problem_response(request, status.HTTP_404_NOT_FOUND)
    return CategoryRead.from_entity(category)
