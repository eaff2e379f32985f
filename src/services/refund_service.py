from sqlalchemy.orm import Session
from src.models.database import Order, OrderStatus, Payment, PaymentStatus
from src.core.errors import (
    AlreadyRefundedError,
    OrderManagementError,
    OrderNotFoundError,
    PaymentMismatchError,
    PaymentNotFoundError,
)
import logging

logger = logging.getLogger(__name__)

class RefundService:
    """
    Refund workflow for a paid order.

    The payment must match the order total exactly before anything changes.
    Order and payment are locked for the duration of the check (FOR UPDATE,
    a no-op on SQLite) and both status changes are committed together, so no
    reader ever sees one refunded without the other.
    """

    def __init__(self, db: Session):
        self.db = db

    def refund_order(self, refund_order_id: int) -> None:
        """
        Mark the order and its payment as refunded.

        Raises OrderNotFoundError / PaymentNotFoundError when either row is
        missing, AlreadyRefundedError for a payment that is already refunded
        and PaymentMismatchError when payment_amount != total_amount.
        """
        logger.info(f"Refund requested for order {refund_order_id}")

        try:
            order = self.db.query(Order).filter(
                Order.order_id == refund_order_id
            ).with_for_update().first()
            if not order:
                raise OrderNotFoundError(refund_order_id)

            payment = self.db.query(Payment).filter(
                Payment.order_id == refund_order_id
            ).with_for_update().first()
            if not payment:
                raise PaymentNotFoundError(
                    refund_order_id, f"No payment recorded for order {refund_order_id}"
                )

            if payment.payment_status == PaymentStatus.REFUNDED:
                raise AlreadyRefundedError(refund_order_id)

            # Exact fixed-point comparison, no tolerance
            if payment.payment_amount != order.total_amount:
                raise PaymentMismatchError(
                    refund_order_id, order.total_amount, payment.payment_amount
                )

            payment.payment_status = PaymentStatus.REFUNDED
            order.order_status = OrderStatus.REFUNDED.value
            self.db.commit()
        except OrderManagementError as e:
            self.db.rollback()
            logger.warning(f"Refund of order {refund_order_id} failed: {str(e)}")
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error refunding order {refund_order_id}: {str(e)}")
            raise

        logger.info(f"Order {refund_order_id} and its payment marked as refunded")
