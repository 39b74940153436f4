"""
Order routes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request

from shared.schemas.order import Order, OrderCancelResponse, OrderCreate, StatusUpdate
from orders_service.services.order_store import OrderStore
from orders_service.services.order_workflow import OrderWorkflow

router = APIRouter()


def get_order_store(request: Request) -> OrderStore:
    """Dependency to get the order store"""
    return request.app.state.order_store


def get_order_workflow(request: Request) -> OrderWorkflow:
    """Dependency to get the order creation workflow"""
    return request.app.state.order_workflow


@router.get("", response_model=List[Order])
async def list_orders(
    user_id: Optional[str] = Query(None, alias="userId", description="Filter by user ID"),
    status: Optional[str] = Query(None, description="Filter by order status"),
    store: OrderStore = Depends(get_order_store)
):
    """List orders"""
    return await store.list(user_id=user_id, status=status)


@router.get("/{order_id}", response_model=Order)
async def get_order(order_id: str, store: OrderStore = Depends(get_order_store)):
    """Get an order by ID"""
    return await store.get_by_id(order_id)


@router.post("", response_model=Order, status_code=201)
async def create_order(data: OrderCreate, workflow: OrderWorkflow = Depends(get_order_workflow)):
    """Create a new order priced from the books service"""
    return await workflow.create(data.user_id, data.items)


@router.patch("/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: str,
    data: StatusUpdate,
    store: OrderStore = Depends(get_order_store)
):
    """Update order status"""
    return await store.set_status(order_id, data.status)


@router.delete("/{order_id}", response_model=OrderCancelResponse)
async def cancel_order(order_id: str, store: OrderStore = Depends(get_order_store)):
    """Cancel an order; orders are never deleted"""
    order = await store.cancel(order_id)
    return OrderCancelResponse(message="Order cancelled successfully", order=order)
