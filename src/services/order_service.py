from datetime import date
from decimal import Decimal
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from src.models.database import Customer, Order, OrderItem, Payment, Product
from src.models.schemas import OrderCreate, OrderItemCreate, PaymentCreate
from src.core.errors import (
    ConstraintViolationError,
    CustomerNotFoundError,
    DuplicatePaymentError,
    OrderManagementError,
    OrderNotFoundError,
    PaymentNotFoundError,
    ProductNotFoundError,
)
import logging

logger = logging.getLogger(__name__)

class OrderService:
    """
    Records orders and their line items.

    Stock is not touched here: every OrderItem insert fires the stock trigger
    inside the same flush, so a rejected item rolls back the whole order.
    """

    def __init__(self, db: Session):
        self.db = db

    def place_order(self, order_data: OrderCreate) -> Order:
        """
        Create an order with its items in one transaction.

        unit_price defaults to the product's current price and total_amount
        defaults to the sum of quantity * unit_price over the items.
        """
        logger.info(f"Placing order for customer {order_data.customer_id}")

        try:
            customer = self.db.get(Customer, order_data.customer_id)
            if not customer:
                raise CustomerNotFoundError(order_data.customer_id)

            items = [self._build_item(item_request) for item_request in order_data.items]

            total_amount = order_data.total_amount
            if total_amount is None:
                total_amount = sum(
                    (item.unit_price * item.quantity for item in items), Decimal("0.00")
                )

            order = Order(
                customer_id=customer.customer_id,
                order_date=order_data.order_date or date.today(),
                total_amount=total_amount,
                order_status=order_data.order_status,
            )
            self.db.add(order)
            self.db.flush()  # Get the order ID

            for item in items:
                item.order_id = order.order_id
                self.db.add(item)
            self.db.flush()

            self.db.commit()
        except OrderManagementError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Constraint violation placing order: {str(e.orig)}")
            raise ConstraintViolationError(str(e.orig)) from e
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error placing order: {str(e)}")
            raise

        self.db.refresh(order)
        logger.info(f"Order {order.order_id} placed with total {order.total_amount}")
        return order

    def add_item(self, order_id: int, item_data: OrderItemCreate) -> OrderItem:
        """Insert one line item into an existing order; total_amount is left as is"""
        try:
            order = self.db.get(Order, order_id)
            if not order:
                raise OrderNotFoundError(order_id)

            item = self._build_item(item_data)
            item.order_id = order.order_id
            self.db.add(item)
            self.db.commit()
        except OrderManagementError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            self.db.rollback()
            raise ConstraintViolationError(str(e.orig)) from e

        self.db.refresh(item)
        return item

    def get_order(self, order_id: int) -> Order:
        order = self.db.get(Order, order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        return order

    def list_orders(self) -> List[Order]:
        return self.db.query(Order).order_by(Order.order_id).all()

    def _build_item(self, item_request: OrderItemCreate) -> OrderItem:
        product = self.db.get(Product, item_request.product_id)
        if not product:
            raise ProductNotFoundError(item_request.product_id)

        unit_price = item_request.unit_price
        if unit_price is None:
            unit_price = product.price

        return OrderItem(
            product_id=product.product_id,
            quantity=item_request.quantity,
            unit_price=unit_price,
        )


class PaymentService:
    """Records payments; an order carries at most one payment"""

    def __init__(self, db: Session):
        self.db = db

    def record_payment(self, payment_data: PaymentCreate) -> Payment:
        order = self.db.get(Order, payment_data.order_id)
        if not order:
            raise OrderNotFoundError(payment_data.order_id)

        existing = self.db.query(Payment).filter(
            Payment.order_id == payment_data.order_id
        ).first()
        if existing:
            raise DuplicatePaymentError(payment_data.order_id)

        payment = Payment(
            order_id=order.order_id,
            payment_date=payment_data.payment_date or date.today(),
            payment_amount=payment_data.payment_amount,
            payment_method=payment_data.payment_method,
        )
        self.db.add(payment)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A concurrent payment won the unique constraint on order_id
            self.db.rollback()
            raise DuplicatePaymentError(payment_data.order_id) from e

        self.db.refresh(payment)
        logger.info(
            f"Recorded payment {payment.payment_id} of {payment.payment_amount} "
            f"for order {payment.order_id}"
        )
        return payment

    def get_payment(self, payment_id: int) -> Payment:
        payment = self.db.get(Payment, payment_id)
        if not payment:
            raise PaymentNotFoundError(payment_id)
        return payment
