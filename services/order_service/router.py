from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.catalog_service.store import CatalogStore, get_catalog_store
from shared.config import settings
from shared.config.database import get_db
from shared.security import CurrentUser, get_current_user, limiter, require_admin

from .exceptions import (
    ArtworkUnavailableError,
    EmptyOrderError,
    OrderNotFoundError,
    OrderNumberConflictError,
    OrderUpdateConflictError,
)
from .schemas import (
    OrderCreate,
    OrderDetailResponse,
    OrderEnvelope,
    OrderListResponse,
    OrderQuoteRequest,
    OrderQuoteResponse,
    OrderStats,
    OrderStatus,
    OrderStatusUpdate,
)
from .service import OrderService

router = APIRouter(tags=["Orders"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "order", "status": "running"}


@router.post("/", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.CHECKOUT_RATE_LIMIT)
async def create_order(
    request: Request,  # REQUIRED: slowapi needs this to key the limit
    payload: OrderCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    try:
        order = await OrderService.create_order(db, catalog, user, payload)
    except (EmptyOrderError, ArtworkUnavailableError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OrderNumberConflictError:
        raise HTTPException(status_code=503, detail="Could not place the order right now, please retry")
    return {"order": await OrderService.to_response(catalog, order), "message": "Order created successfully"}


@router.post("/quote", response_model=OrderQuoteResponse)
async def quote_order(
    payload: OrderQuoteRequest,
    user: CurrentUser = Depends(get_current_user),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    try:
        return await OrderService.quote(catalog, payload.items)
    except (EmptyOrderError, ArtworkUnavailableError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/", response_model=OrderListResponse)
async def list_orders(
    status_filter: Optional[OrderStatus] = Query(default=None, alias="status"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    orders = await OrderService.list_orders(db, user, status_filter)
    return {"orders": await OrderService.to_responses(catalog, orders), "count": len(orders)}


@router.get("/stats/overview", response_model=dict[str, OrderStats])
async def order_stats(admin: CurrentUser = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return {"stats": await OrderService.stats(db)}


@router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    try:
        order = await OrderService.get_order(db, user, order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"order": await OrderService.to_response(catalog, order)}


@router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
):
    try:
        order = await OrderService.update_order_status(db, catalog, order_id, payload)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except OrderUpdateConflictError:
        raise HTTPException(status_code=503, detail="Order was modified concurrently, please retry")
    return {"order": await OrderService.to_response(catalog, order), "message": "Order status updated successfully"}
