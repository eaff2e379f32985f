#!/usr/bin/env python
"""
Load the sample order management dataset.

Run with `python -m src.seed`; tables are created when missing (the API also
creates them at startup). Order items go through the ORM so the stock trigger
adjusts product inventory exactly as it does for live orders.
"""
import logging
from datetime import date
from decimal import Decimal
from sqlalchemy import text
from sqlalchemy.orm import Session
from src.core.database import Base, SessionLocal, engine
from src.models.database import (
    Customer, Order, OrderItem, OrderStatus, Payment, Product, Review,
)

logger = logging.getLogger(__name__)

CUSTOMERS = [
    (1, "John Doe", "john.doe@example.com", "123 Elm Street", "555-1234"),
    (2, "Jane Smith", "jane.smith@example.com", "456 Oak Avenue", "555-5678"),
    (3, "Alice Johnson", "alice.johnson@example.com", "789 Pine Road", "555-8765"),
    (4, "Bob Brown", "bob.brown@example.com", "321 Maple Lane", "555-4321"),
    (5, "Charlie Davis", "charlie.davis@example.com", "654 Cedar Court", "555-6789"),
]

PRODUCTS = [
    (1, "Laptop", "1000.00", 50),
    (2, "Smartphone", "500.00", 100),
    (3, "Headphones", "150.00", 200),
    (4, "Keyboard", "50.00", 150),
    (5, "Monitor", "300.00", 75),
]

ORDERS = [
    (1, 1, date(2024, 9, 1), "1500.00", OrderStatus.COMPLETED),
    (2, 2, date(2024, 9, 3), "650.00", OrderStatus.PENDING),
    (3, 3, date(2024, 9, 5), "300.00", OrderStatus.COMPLETED),
    (4, 1, date(2024, 9, 10), "200.00", OrderStatus.COMPLETED),
]

# (order_item_id, order_id, product_id, quantity, unit_price)
ORDER_ITEMS = [
    (1, 1, 1, 1, "1000.00"),
    (2, 1, 2, 1, "500.00"),
    (3, 2, 3, 1, "150.00"),
    (4, 2, 2, 1, "500.00"),
    (5, 3, 5, 1, "300.00"),
    (6, 4, 4, 4, "50.00"),
]

# Order 2 is deliberately underpaid so its refund is rejected
PAYMENTS = [
    (1, 1, date(2024, 9, 1), "1500.00", "Credit Card"),
    (2, 2, date(2024, 9, 3), "500.00", "PayPal"),
    (3, 3, date(2024, 9, 5), "300.00", "Debit Card"),
    (4, 4, date(2024, 9, 10), "200.00", "Credit Card"),
]

REVIEWS = [
    (1, 1, 1, date(2024, 9, 5), 5, "Excellent laptop, very fast!"),
    (2, 2, 2, date(2024, 9, 6), 4, "Good phone, but battery life could be better."),
    (3, 3, 3, date(2024, 9, 7), 3, "Decent sound quality for the price."),
    (4, 1, 3, date(2024, 9, 8), 4, "Solid build and a great screen."),
    (5, 5, 3, date(2024, 9, 9), 5, "Crisp display, easy to set up."),
]

# (table, serial primary key) pairs whose sequences must move past the explicit sample ids
ID_SEQUENCES = [
    ("customers", "customer_id"),
    ("products", "product_id"),
    ("orders", "order_id"),
    ("order_items", "order_item_id"),
    ("payments", "payment_id"),
    ("reviews", "review_id"),
]


def sequence_reset_statements():
    return [
        text(
            f"SELECT setval(pg_get_serial_sequence('{table}', '{column}'), "
            f"(SELECT COALESCE(MAX({column}), 1) FROM {table}))"
        )
        for table, column in ID_SEQUENCES
    ]


def reset_id_sequences(db: Session) -> None:
    """
    Advance PostgreSQL serial sequences past the ids inserted explicitly.

    SQLite picks the next rowid from MAX(rowid), so only PostgreSQL needs it.
    """
    if db.get_bind().dialect.name != "postgresql":
        return
    for statement in sequence_reset_statements():
        db.execute(statement)
    db.commit()
    logger.info(f"Reset {len(ID_SEQUENCES)} id sequences after loading sample data")


def load_sample_data(db: Session) -> None:
    """Insert the sample rows in foreign key order and commit"""
    db.add_all(
        Customer(customer_id=cid, name=name, email=email, address=address, phone=phone)
        for cid, name, email, address, phone in CUSTOMERS
    )
    db.add_all(
        Product(product_id=pid, name=name, price=Decimal(price), stock_quantity=stock)
        for pid, name, price, stock in PRODUCTS
    )
    db.flush()

    db.add_all(
        Order(
            order_id=oid,
            customer_id=cid,
            order_date=order_date,
            total_amount=Decimal(total),
            order_status=status.value,
        )
        for oid, cid, order_date, total, status in ORDERS
    )
    db.flush()

    db.add_all(
        OrderItem(
            order_item_id=iid,
            order_id=oid,
            product_id=pid,
            quantity=quantity,
            unit_price=Decimal(unit_price),
        )
        for iid, oid, pid, quantity, unit_price in ORDER_ITEMS
    )
    db.add_all(
        Payment(
            payment_id=pay_id,
            order_id=oid,
            payment_date=payment_date,
            payment_amount=Decimal(amount),
            payment_method=method,
        )
        for pay_id, oid, payment_date, amount, method in PAYMENTS
    )
    db.add_all(
        Review(
            review_id=rid,
            product_id=pid,
            customer_id=cid,
            review_date=review_date,
            rating=rating,
            review_text=review_text,
        )
        for rid, pid, cid, review_date, rating, review_text in REVIEWS
    )
    db.commit()
    reset_id_sequences(db)

    logger.info(
        f"Loaded {len(CUSTOMERS)} customers, {len(PRODUCTS)} products, "
        f"{len(ORDERS)} orders, {len(PAYMENTS)} payments, {len(REVIEWS)} reviews"
    )


def main():
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        load_sample_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
