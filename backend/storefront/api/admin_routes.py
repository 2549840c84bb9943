"""Admin back-office routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Query, status

from storefront.config import get_settings
from storefront.models.delivery import DeliveryPrice
from storefront.models.league import CustomLeagueCreate, CustomTeamCreate
from storefront.models.request import (
    CustomLeagueResponse,
    CustomLeaguesResponse,
    CustomTeamResponse,
    DashboardResponse,
    DeliveryPriceListResponse,
    DeliveryPriceResponse,
    MessageResponse,
    OrderListResponse,
    ReconcileStockResponse,
    TeamLinkResponse,
)
from storefront.services.catalog_service import catalog_service
from storefront.services.dashboard_service import dashboard_service
from storefront.services.order_service import order_service

logger = logging.getLogger(__name__)
settings = get_settings()

admin_router = APIRouter(prefix=f"{settings.api_prefix}/admin", tags=["admin"])


@admin_router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard() -> DashboardResponse:
    """Dashboard statistics."""
    return await dashboard_service.get_dashboard()


@admin_router.get("/orders", response_model=OrderListResponse)
async def list_orders(limit: Optional[int] = Query(None, ge=1, le=1000)) -> OrderListResponse:
    """List the newest orders."""
    orders = await order_service.list_recent_orders(limit)
    return OrderListResponse(orders=orders, count=len(orders))


@admin_router.delete("/orders/{order_id}", response_model=MessageResponse)
async def delete_order(order_id: str) -> MessageResponse:
    await order_service.delete_order(order_id)
    return MessageResponse(message=f"Order {order_id} deleted")


@admin_router.post("/orders/reconcile-stock", response_model=ReconcileStockResponse)
async def reconcile_stock() -> ReconcileStockResponse:
    """Re-apply stock decrements that failed during order creation."""
    result = await order_service.reconcile_stock()
    return ReconcileStockResponse(**result.model_dump())


@admin_router.get("/leagues", response_model=CustomLeaguesResponse)
async def list_custom_leagues() -> CustomLeaguesResponse:
    return CustomLeaguesResponse(leagues=await catalog_service.list_custom_leagues())


@admin_router.post(
    "/leagues", response_model=CustomLeagueResponse, status_code=status.HTTP_201_CREATED
)
async def create_league(request: CustomLeagueCreate) -> CustomLeagueResponse:
    return CustomLeagueResponse(league=await catalog_service.create_league(request))


@admin_router.delete("/leagues/{league_id}", response_model=MessageResponse)
async def delete_league(league_id: str) -> MessageResponse:
    await catalog_service.delete_league(league_id)
    return MessageResponse(message=f"League {league_id} deleted")


@admin_router.post("/teams", response_model=CustomTeamResponse, status_code=status.HTTP_201_CREATED)
async def create_team(request: CustomTeamCreate) -> CustomTeamResponse:
    """Create a custom team. The league must already exist."""
    return CustomTeamResponse(team=await catalog_service.create_custom_team(request))


@admin_router.post("/teams/link", response_model=TeamLinkResponse)
async def link_teams() -> TeamLinkResponse:
    """Store a league link for every static team that matches a custom league."""
    links, unmatched = await catalog_service.link_static_teams()
    return TeamLinkResponse(linked=len(links), unmatched=unmatched)


@admin_router.get("/delivery-prices", response_model=DeliveryPriceListResponse)
async def list_delivery_prices() -> DeliveryPriceListResponse:
    return DeliveryPriceListResponse(prices=await catalog_service.list_delivery_prices())


@admin_router.put("/delivery-prices", response_model=DeliveryPriceResponse)
async def upsert_delivery_price(price: DeliveryPrice) -> DeliveryPriceResponse:
    """Set the delivery fee for a location."""
    saved = await catalog_service.upsert_delivery_price(price)
    return DeliveryPriceResponse(price=saved.price, location=saved.location, found=True)
