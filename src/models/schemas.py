from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from decimal import Decimal
from src.models.database import OrderStatus, PaymentStatus

class CustomerBase(BaseModel):
    name: str
    email: str
    address: Optional[str] = None
    phone: Optional[str] = None

class CustomerCreate(CustomerBase):
    pass

class Customer(CustomerBase):
    customer_id: int

    class Config:
        from_attributes = True

class ProductBase(BaseModel):
    name: str
    price: Decimal = Field(max_digits=10, decimal_places=2)
    stock_quantity: int = 0

class ProductCreate(ProductBase):
    stock_quantity: int = Field(default=0, ge=0)

class Product(ProductBase):
    product_id: int

    class Config:
        from_attributes = True

class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)
    # Defaults to the product's current price
    unit_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)

class OrderItem(BaseModel):
    order_item_id: int
    order_id: int
    product_id: int
    quantity: int
    unit_price: Decimal

    class Config:
        from_attributes = True

class OrderCreate(BaseModel):
    customer_id: int
    order_date: Optional[date] = None
    # Computed from the items when omitted
    total_amount: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    order_status: str = OrderStatus.PENDING.value
    items: List[OrderItemCreate] = []

class Order(BaseModel):
    order_id: int
    customer_id: int
    order_date: date
    total_amount: Decimal
    order_status: str
    order_items: List[OrderItem] = []

    class Config:
        from_attributes = True

class PaymentCreate(BaseModel):
    order_id: int
    payment_date: Optional[date] = None
    payment_amount: Decimal = Field(max_digits=10, decimal_places=2)
    payment_method: str

class Payment(BaseModel):
    payment_id: int
    order_id: int
    payment_date: date
    payment_amount: Decimal
    payment_method: str
    payment_status: PaymentStatus

    class Config:
        from_attributes = True

class ReviewCreate(BaseModel):
    product_id: int
    customer_id: int
    review_date: Optional[date] = None
    rating: int
    review_text: Optional[str] = None

class Review(ReviewCreate):
    review_id: int
    review_date: date

    class Config:
        from_attributes = True

class OrderTotalRow(BaseModel):
    order_id: int
    customer_name: str
    order_date: date
    order_total: Decimal

class InactiveCustomerRow(BaseModel):
    customer_id: int
    name: str
    email: str

class BestSellerRow(BaseModel):
    product_id: int
    name: str
    total_sold: int
    sales_rank: int

class AverageRatingRow(BaseModel):
    product_id: int
    name: str
    average_rating: Optional[float] = None
    review_count: int
