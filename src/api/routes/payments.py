from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from src.api.errors import to_http_exception
from src.core.database import get_db
from src.core.errors import OrderManagementError
from src.models.schemas import Payment, PaymentCreate
from src.services.order_service import PaymentService

router = APIRouter()

@router.post("/", response_model=Payment, status_code=201)
async def create_payment(payment_data: PaymentCreate, db: Session = Depends(get_db)):
    """Record the payment for an order"""
    try:
        return PaymentService(db).record_payment(payment_data)
    except OrderManagementError as e:
        raise to_http_exception(e)

@router.get("/{payment_id}", response_model=Payment)
async def get_payment(payment_id: int, db: Session = Depends(get_db)):
    """Get a specific payment"""
    try:
        return PaymentService(db).get_payment(payment_id)
    except OrderManagementError as e:
        raise to_http_exception(e)
