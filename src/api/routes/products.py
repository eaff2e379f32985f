from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from src.core.database import get_db
from src.models.database import Product as DBProduct
from src.models.schemas import Product, ProductCreate

router = APIRouter()

@router.post("/", response_model=Product, status_code=201)
async def create_product(product_data: ProductCreate, db: Session = Depends(get_db)):
    """Create a new product"""
    product = DBProduct(**product_data.dict())
    db.add(product)
    db.commit()
    db.refresh(product)
    return product

@router.get("/", response_model=List[Product])
async def get_products(db: Session = Depends(get_db)):
    """Get all products with their current stock"""
    return db.query(DBProduct).order_by(DBProduct.product_id).all()

@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    """Get a specific product"""
    product = db.get(DBProduct, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
