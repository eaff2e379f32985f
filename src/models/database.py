import enum
import logging
from datetime import date
from sqlalchemy import (
    Column, Integer, String, Numeric, Date, Text, ForeignKey, Enum, CheckConstraint,
    case, event, inspect, update,
)
from sqlalchemy.orm import relationship, Session, object_session
from src.core import config
from src.core.config import StockPolicy, parse_stock_policy
from src.core.database import Base
from src.core.errors import InsufficientStockError

logger = logging.getLogger(__name__)


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    REFUNDED = "Refunded"


class PaymentStatus(str, enum.Enum):
    PAID = "Paid"
    REFUNDED = "Refunded"


class Customer(Base):
    """Customer registered with the shop"""
    __tablename__ = "customers"

    customer_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    address = Column(String(255))
    phone = Column(String(20))

    orders = relationship("Order", back_populates="customer")
    reviews = relationship("Review", back_populates="customer")


class Product(Base):
    """Product for sale; stock_quantity is adjusted when order items are inserted"""
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)

    order_items = relationship("OrderItem", back_populates="product")
    reviews = relationship("Review", back_populates="product")


class Order(Base):
    """Customer order; order_status moves Pending -> Completed and may end Refunded"""
    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.customer_id"), nullable=False, index=True)
    order_date = Column(Date, nullable=False, default=date.today)
    total_amount = Column(Numeric(10, 2), nullable=False)
    order_status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)

    customer = relationship("Customer", back_populates="orders")
    order_items = relationship("OrderItem", back_populates="order")
    payment = relationship("Payment", back_populates="order", uselist=False)


class OrderItem(Base):
    """Line item; unit_price is the price at time of sale, not the current product price"""
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )

    order_item_id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.order_id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="order_items")
    product = relationship("Product", back_populates="order_items")


class Payment(Base):
    """Payment for an order; at most one per order"""
    __tablename__ = "payments"

    payment_id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.order_id"), unique=True, nullable=False)
    payment_date = Column(Date, nullable=False, default=date.today)
    payment_amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(50), nullable=False)
    payment_status = Column(
        Enum(
            PaymentStatus,
            name="payment_status",
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=PaymentStatus.PAID,
    )

    order = relationship("Order", back_populates="payment")


class Review(Base):
    """Product review; not tied to a purchase and rating is not range-checked"""
    __tablename__ = "reviews"

    review_id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.customer_id"), nullable=False, index=True)
    review_date = Column(Date, nullable=False, default=date.today)
    rating = Column(Integer, nullable=False)
    review_text = Column(Text)

    product = relationship("Product", back_populates="reviews")
    customer = relationship("Customer", back_populates="reviews")


# Triggers

STOCK_ADJUSTED_KEY = "stock_adjusted_product_ids"


def stock_decrement_statement(product_id: int, quantity: int, policy: StockPolicy):
    """Build the UPDATE that takes quantity out of a product's stock under the given policy"""
    products = Product.__table__
    stmt = update(products).where(products.c.product_id == product_id)

    if policy is StockPolicy.REJECT:
        return stmt.where(products.c.stock_quantity >= quantity).values(
            stock_quantity=products.c.stock_quantity - quantity
        )
    if policy is StockPolicy.CLAMP:
        return stmt.values(
            stock_quantity=case(
                (products.c.stock_quantity >= quantity, products.c.stock_quantity - quantity),
                else_=0,
            )
        )
    return stmt.values(stock_quantity=products.c.stock_quantity - quantity)


@event.listens_for(OrderItem, "after_insert")
def decrement_stock_after_item_insert(mapper, connection, target):
    """Take the item's quantity out of product stock inside the inserting flush"""
    policy = parse_stock_policy(config.STOCK_POLICY)
    result = connection.execute(
        stock_decrement_statement(target.product_id, target.quantity, policy)
    )

    if result.rowcount == 0:
        # The FK already guarantees the product exists, so only the floor guard can miss
        logger.warning(
            f"Rejected order item for product {target.product_id}: "
            f"quantity {target.quantity} exceeds stock"
        )
        raise InsufficientStockError(target.product_id, target.quantity)

    logger.info(
        f"Adjusted stock for product {target.product_id} by -{target.quantity} "
        f"(policy {policy.value})"
    )

    session = object_session(target)
    if session is not None:
        session.info.setdefault(STOCK_ADJUSTED_KEY, set()).add(target.product_id)


@event.listens_for(Session, "after_flush_postexec")
def expire_adjusted_stock(session, flush_context):
    """Loaded products would otherwise keep the stock value read before the UPDATE"""
    product_ids = session.info.pop(STOCK_ADJUSTED_KEY, None)
    if not product_ids:
        return
    for obj in list(session.identity_map.values()):
        if not isinstance(obj, Product):
            continue
        identity = inspect(obj).identity
        if identity and identity[0] in product_ids:
            session.expire(obj, ["stock_quantity"])
