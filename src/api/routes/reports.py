from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from src.core.database import get_db
from src.models.schemas import AverageRatingRow, BestSellerRow, InactiveCustomerRow, OrderTotalRow
from src.services.report_service import ReportService

router = APIRouter()

@router.get("/order-totals", response_model=List[OrderTotalRow])
async def order_totals(db: Session = Depends(get_db)):
    """Line-item total per order with the customer name"""
    return ReportService(db).order_totals()

@router.get("/inactive-customers", response_model=List[InactiveCustomerRow])
async def inactive_customers(
    as_of: Optional[date] = None,
    window_days: Optional[int] = Query(default=None, ge=0),
    db: Session = Depends(get_db),
):
    """Customers with no order in the trailing window ending at as_of"""
    return ReportService(db).inactive_customers(as_of=as_of, window_days=window_days)

@router.get("/best-sellers", response_model=List[BestSellerRow])
async def best_sellers(limit: Optional[int] = Query(default=None, ge=1), db: Session = Depends(get_db)):
    """Products ranked by units sold"""
    return ReportService(db).best_sellers(limit=limit)

@router.get("/average-ratings", response_model=List[AverageRatingRow])
async def average_ratings(db: Session = Depends(get_db)):
    """Average review rating per product"""
    return ReportService(db).average_ratings()
