"""Exception hierarchy for the order management backend.

- OrderManagementError (base)
  - NotFoundError: Customer/Product/Order/PaymentNotFoundError
  - ConstraintViolationError: DuplicateEmailError, DuplicatePaymentError
  - InsufficientStockError
  - RefundError: PaymentMismatchError, AlreadyRefundedError

Routes map NotFoundError to 404, ConstraintViolationError and
InsufficientStockError to 409 and RefundError to 400.
"""


class OrderManagementError(Exception):
    """Base class for all business errors raised by the services"""
    pass


class NotFoundError(OrderManagementError):
    """A referenced row does not exist"""

    entity = "Record"

    def __init__(self, key, message: str = None):
        self.key = key
        super().__init__(message or f"{self.entity} {key} not found")


class CustomerNotFoundError(NotFoundError):
    entity = "Customer"


class ProductNotFoundError(NotFoundError):
    entity = "Product"


class OrderNotFoundError(NotFoundError):
    entity = "Order"


class PaymentNotFoundError(NotFoundError):
    entity = "Payment"


class ConstraintViolationError(OrderManagementError):
    """A uniqueness or referential constraint would be violated"""
    pass


class DuplicateEmailError(ConstraintViolationError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Customer email {email} already exists")


class DuplicatePaymentError(ConstraintViolationError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} already has a payment")


class InsufficientStockError(OrderManagementError):
    """Raised when an order item would take a product's stock below zero"""

    def __init__(self, product_id: int, requested: int):
        self.product_id = product_id
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {product_id}. "
            f"Requested: {requested}"
        )


class RefundError(OrderManagementError):
    """Business-rule failure of the refund workflow; nothing was changed"""
    pass


class PaymentMismatchError(RefundError):
    def __init__(self, order_id: int, total_amount, payment_amount):
        self.order_id = order_id
        self.total_amount = total_amount
        self.payment_amount = payment_amount
        super().__init__("Payment amount mismatch; refund failed")


class AlreadyRefundedError(RefundError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} has already been refunded")
