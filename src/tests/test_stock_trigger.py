import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from src.core import config
from src.core.errors import InsufficientStockError
from src.models.database import Order, OrderItem, Product

def _order(db, customer):
    order = Order(
        customer_id=customer.customer_id,
        order_date=date(2024, 9, 1),
        total_amount=Decimal("0.00"),
    )
    db.add(order)
    db.flush()
    return order

def _item(order, product, quantity):
    return OrderItem(
        order_id=order.order_id,
        product_id=product.product_id,
        quantity=quantity,
        unit_price=product.price,
    )

class TestStockTrigger:
    """The order item insert takes the quantity out of product stock"""

    def test_insert_decrements_stock(self, test_db, customer, products):
        laptop, smartphone = products
        order = _order(test_db, customer)

        test_db.add(_item(order, laptop, 3))
        test_db.commit()

        test_db.refresh(laptop)
        test_db.refresh(smartphone)
        assert laptop.stock_quantity == 7  # 10 - 3
        assert smartphone.stock_quantity == 10  # untouched

    def test_each_item_updates_its_own_product(self, test_db, customer, products):
        laptop, smartphone = products
        order = _order(test_db, customer)

        test_db.add_all([_item(order, laptop, 1), _item(order, smartphone, 2)])
        test_db.commit()

        test_db.refresh(laptop)
        test_db.refresh(smartphone)
        assert laptop.stock_quantity == 9
        assert smartphone.stock_quantity == 8

    def test_loaded_product_sees_new_stock_after_flush(self, test_db, customer, products):
        laptop, _ = products
        assert laptop.stock_quantity == 10
        order = _order(test_db, customer)

        test_db.add(_item(order, laptop, 4))
        test_db.flush()

        # No refresh: the trigger expired the cached value within the transaction
        assert laptop.stock_quantity == 6
        test_db.rollback()

    def test_reject_policy_blocks_oversell(self, test_db, customer, products):
        laptop, _ = products
        order = _order(test_db, customer)
        order_id = order.order_id
        test_db.commit()

        test_db.add(_item(order, laptop, 11))
        with pytest.raises(InsufficientStockError) as exc_info:
            test_db.commit()
        test_db.rollback()

        assert exc_info.value.product_id == laptop.product_id
        assert test_db.get(Product, laptop.product_id).stock_quantity == 10
        assert test_db.query(OrderItem).filter(OrderItem.order_id == order_id).count() == 0

    def test_reject_policy_allows_exact_stock(self, test_db, customer, products):
        laptop, _ = products
        order = _order(test_db, customer)

        test_db.add(_item(order, laptop, 10))
        test_db.commit()

        test_db.refresh(laptop)
        assert laptop.stock_quantity == 0

    def test_clamp_policy_floors_at_zero(self, test_db, customer, products, monkeypatch):
        monkeypatch.setattr(config, "STOCK_POLICY", "clamp")
        laptop, _ = products
        order = _order(test_db, customer)

        test_db.add(_item(order, laptop, 15))
        test_db.commit()

        test_db.refresh(laptop)
        assert laptop.stock_quantity == 0

    def test_backorder_policy_allows_negative_stock(self, test_db, customer, products, monkeypatch):
        monkeypatch.setattr(config, "STOCK_POLICY", "backorder")
        laptop, _ = products
        order = _order(test_db, customer)

        test_db.add(_item(order, laptop, 12))
        test_db.commit()

        test_db.refresh(laptop)
        assert laptop.stock_quantity == -2

    def test_unknown_product_is_constraint_violation(self, test_db, customer):
        order = _order(test_db, customer)
        test_db.add(OrderItem(
            order_id=order.order_id,
            product_id=999,
            quantity=1,
            unit_price=Decimal("10.00"),
        ))

        with pytest.raises(IntegrityError):
            test_db.commit()
        test_db.rollback()

    def test_policy_setting_is_case_insensitive(self, test_db, customer, products, monkeypatch):
        monkeypatch.setattr(config, "STOCK_POLICY", "Clamp")
        laptop, _ = products
        order = _order(test_db, customer)

        test_db.add(_item(order, laptop, 15))
        test_db.commit()

        test_db.refresh(laptop)
        assert laptop.stock_quantity == 0
