from datetime import date, timedelta
from typing import List, Optional
from sqlalchemy import and_, desc, func, select
from sqlalchemy.orm import Session
from src.core import config
from src.models.database import Customer, Order, OrderItem, Product, Review
import logging

logger = logging.getLogger(__name__)

class ReportService:
    """Read-only aggregations over the order schema. Each report returns a list of row dicts."""

    def __init__(self, db: Session):
        self.db = db

    def order_totals(self) -> List[dict]:
        """Sum of quantity * unit_price per order, joined to the customer name"""
        order_total = func.sum(OrderItem.quantity * OrderItem.unit_price)
        stmt = (
            select(
                Order.order_id,
                Customer.name.label("customer_name"),
                Order.order_date,
                order_total.label("order_total"),
            )
            .join(Customer, Order.customer_id == Customer.customer_id)
            .join(OrderItem, OrderItem.order_id == Order.order_id)
            .group_by(Order.order_id, Customer.name, Order.order_date)
            .order_by(Order.order_id)
        )
        return self._rows(stmt)

    def inactive_customers(
        self, as_of: Optional[date] = None, window_days: Optional[int] = None
    ) -> List[dict]:
        """
        Customers without any order dated within [as_of - window_days, as_of].

        as_of is passed in rather than read from the clock so the report is
        repeatable; it falls back to today only when omitted.
        """
        as_of = as_of or date.today()
        if window_days is None:
            window_days = config.INACTIVE_WINDOW_DAYS
        window_start = as_of - timedelta(days=window_days)

        stmt = (
            select(Customer.customer_id, Customer.name, Customer.email)
            .outerjoin(
                Order,
                and_(
                    Order.customer_id == Customer.customer_id,
                    Order.order_date >= window_start,
                    Order.order_date <= as_of,
                ),
            )
            .where(Order.order_id.is_(None))
            .order_by(Customer.customer_id)
        )
        return self._rows(stmt)

    def best_sellers(self, limit: Optional[int] = None) -> List[dict]:
        """
        Products ranked by units sold. RANK() gives equal totals the same rank
        and skips the following rank values.
        """
        if limit is None:
            limit = config.BEST_SELLER_LIMIT

        total_sold = func.sum(OrderItem.quantity)
        sales_rank = func.rank().over(order_by=desc(total_sold))
        stmt = (
            select(
                Product.product_id,
                Product.name,
                total_sold.label("total_sold"),
                sales_rank.label("sales_rank"),
            )
            .join(OrderItem, OrderItem.product_id == Product.product_id)
            .group_by(Product.product_id, Product.name)
            .order_by(desc(total_sold), Product.product_id)
            .limit(limit)
        )
        return self._rows(stmt)

    def average_ratings(self) -> List[dict]:
        """Average rating per product; products without reviews report None"""
        stmt = (
            select(
                Product.product_id,
                Product.name,
                func.avg(Review.rating).label("average_rating"),
                func.count(Review.review_id).label("review_count"),
            )
            .outerjoin(Review, Review.product_id == Product.product_id)
            .group_by(Product.product_id, Product.name)
            .order_by(Product.product_id)
        )
        rows = self._rows(stmt)
        for row in rows:
            if row["average_rating"] is not None:
                row["average_rating"] = float(row["average_rating"])
        return rows

    def _rows(self, stmt) -> List[dict]:
        rows = [dict(row) for row in self.db.execute(stmt).mappings()]
        logger.debug(f"Report returned {len(rows)} rows")
        return rows
