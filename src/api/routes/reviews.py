from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
from src.core.database import get_db
from src.models.database import Review as DBReview
from src.models.schemas import Review, ReviewCreate

router = APIRouter()

@router.post("/", response_model=Review, status_code=201)
async def create_review(review_data: ReviewCreate, db: Session = Depends(get_db)):
    """Create a product review"""
    values = review_data.dict()
    values["review_date"] = review_data.review_date or date.today()
    review = DBReview(**values)
    db.add(review)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Unknown product or customer")
    db.refresh(review)
    return review

@router.get("/", response_model=List[Review])
async def get_reviews(product_id: Optional[int] = None, db: Session = Depends(get_db)):
    """Get all reviews, optionally for one product"""
    query = db.query(DBReview)
    if product_id is not None:
        query = query.filter(DBReview.product_id == product_id)
    return query.order_by(DBReview.review_id).all()
