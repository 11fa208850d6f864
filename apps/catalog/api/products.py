from typing import List
from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from framework.config import settings
from framework.middleware.validation_md import INT32_MAX
from framework.problem_details import problem_response
from framework.repository.options import RemoveStrategy
from ..schemas import ProductCreate, ProductPatch, ProductRead, ProductUpdate
from ..service import ProductService
from .common import NO_CONTENT, NOT_FOUND, key_mismatch, no_content
from .deps import get_product_service, get_remove_strategy

router = APIRouter()

@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductRead,
    name="create_product",
)
async def create_product(
    payload: ProductCreate,
    request: Request,
    response: Response,
    service: ProductService = Depends(get_product_service)
):
    """Create a product in an existing, visible category."""
    product = await service.create(payload.to_entity())
    response.headers["Location"] = str(request.url_for("get_product_by_id", product_id=product.id))
    return ProductRead.from_entity(product)

@router.get("", response_model=List[ProductRead], name="get_products", responses=NO_CONTENT)
async def get_products(
    response: Response,
    limit: int = Query(default=settings.DEFAULT_ITEMS_PER_PAGE, ge=1, le=settings.MAX_ITEMS_PER_PAGE),
    offset: int = Query(default=0, ge=0, le=INT32_MAX),
    service: ProductService = Depends(get_product_service)
):
    products, total = await service.list_page(limit=limit, offset=offset)
    if not products:
        return no_content()

    response.headers["X-Total-Count"] = str(total)
    return ProductRead.from_entities(products)

@router.get("/{product_id}", response_model=ProductRead, name="get_product_by_id", responses=NOT_FOUND)
async def get_product_by_id(
    request: Request,
    product_id: int = Path(ge=1, le=INT32_MAX),
    service: ProductService = Depends(get_product_service)
):
    product = await service.get(product_id)
    if product is None:
        return problem_response(request, status.HTTP_404_NOT_FOUND)
    return ProductRead.from_entity(product)

@router.put("/{product_id}", response_model=ProductRead, name="update_product_by_id", responses=NOT_FOUND)
async def update_product_by_id(
    payload: ProductUpdate,
    request: Request,
    product_id: int = Path(ge=1, le=INT32_MAX),
    service: ProductService = Depends(get_product_service)
):
    mismatch = key_mismatch(request, product_id, payload.id)
    if mismatch is not None:
        return mismatch

    product = await service.update(product_id, payload.to_entity())
    if product is None:
        return problem_response(request, status.HTTP_404_NOT_FOUND)
    return ProductRead.from_entity(product)

@router.patch("/{product_id}", response_model=ProductRead, name="patch_product_by_id", responses=NOT_FOUND)
async def patch_product_by_id(
    payload: ProductPatch,
    request: Request,
    product_id: int = Path(ge=1, le=INT32_MAX),
    service: ProductService = Depends(get_product_service)
):
    mismatch = key_mismatch(request, product_id, payload.id)
    if mismatch is not None:
        return mismatch

    product = await service.update(product_id, payload.to_entity())
    if product is None:
        return problem_response(request, status.HTTP_404_NOT_FOUND)
    return ProductRead.from_entity(product)

@router.delete("/{product_id}", response_model=ProductRead, name="delete_product_by_id", responses=NOT_FOUND)
async def delete_product_by_id(
    request: Request,
    product_id: int = Path(ge=1, le=INT32_MAX),
    strategy: RemoveStrategy = Depends(get_remove_strategy),
    service: ProductService = Depends(get_product_service)
):
    product = await service.remove(product_id, strategy)
    if product is None:
        return problem_response(request, status.HTTP_404_NOT_FOUND)
    return ProductRead.from_entity(product)
