from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
from src.api.errors import to_http_exception
from src.core.database import get_db
from src.core.errors import DuplicateEmailError
from src.models.database import Customer as DBCustomer
from src.models.schemas import Customer, CustomerCreate

router = APIRouter()

@router.post("/", response_model=Customer, status_code=201)
async def create_customer(customer_data: CustomerCreate, db: Session = Depends(get_db)):
    """Register a new customer"""
    # Check if email already exists
    existing = db.query(DBCustomer).filter(
        DBCustomer.email == customer_data.email
    ).first()
    if existing:
        raise to_http_exception(DuplicateEmailError(customer_data.email))

    customer = DBCustomer(**customer_data.dict())
    db.add(customer)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise to_http_exception(DuplicateEmailError(customer_data.email))
    db.refresh(customer)
    return customer

@router.get("/", response_model=List[Customer])
async def get_customers(db: Session = Depends(get_db)):
    """Get all customers"""
    return db.query(DBCustomer).order_by(DBCustomer.customer_id).all()

@router.get("/{customer_id}", response_model=Customer)
async def get_customer(customer_id: int, db: Session = Depends(get_db)):
    """Get a specific customer"""
    customer = db.get(DBCustomer, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer
