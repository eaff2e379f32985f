from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List
from src.api.errors import to_http_exception
from src.core.database import get_db
from src.core.errors import OrderManagementError
from src.models.schemas import Order, OrderCreate, OrderItem, OrderItemCreate
from src.services.order_service import OrderService
from src.services.refund_service import RefundService

router = APIRouter()

@router.post("/", response_model=Order, status_code=201)
async def create_order(order_data: OrderCreate, db: Session = Depends(get_db)):
    """Place an order; each line item adjusts product stock"""
    try:
        return OrderService(db).place_order(order_data)
    except OrderManagementError as e:
        raise to_http_exception(e)

@router.get("/", response_model=List[Order])
async def get_orders(db: Session = Depends(get_db)):
    """Get all orders"""
    return OrderService(db).list_orders()

@router.get("/{order_id}", response_model=Order)
async def get_order(order_id: int, db: Session = Depends(get_db)):
    """Get a specific order"""
    try:
        return OrderService(db).get_order(order_id)
    except OrderManagementError as e:
        raise to_http_exception(e)

@router.post("/{order_id}/items", response_model=OrderItem, status_code=201)
async def add_order_item(order_id: int, item_data: OrderItemCreate, db: Session = Depends(get_db)):
    """Add a line item to an existing order"""
    try:
        return OrderService(db).add_item(order_id, item_data)
    except OrderManagementError as e:
        raise to_http_exception(e)

@router.post("/{order_id}/refund", status_code=204)
async def refund_order(order_id: int, db: Session = Depends(get_db)):
    """Refund an order whose payment matches its total"""
    try:
        RefundService(db).refund_order(order_id)
    except OrderManagementError as e:
        raise to_http_exception(e)
    return Response(status_code=204)
