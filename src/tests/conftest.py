import os
import pytest
from decimal import Decimal
from sqlalchemy.orm import sessionmaker
from src.core.database import Base, create_db_engine
from src.models.database import Customer, Product
from src.seed import load_sample_data

# File-backed SQLite so the API tests' sessions share the same data
TEST_DATABASE_URL = "sqlite:///./test_order_management.db"

@pytest.fixture
def test_engine():
    engine = create_db_engine(TEST_DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists("./test_order_management.db"):
        os.remove("./test_order_management.db")

@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

@pytest.fixture
def test_db(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def seeded_db(test_db):
    """Database loaded with the sample dataset"""
    load_sample_data(test_db)
    return test_db

@pytest.fixture
def customer(test_db):
    customer = Customer(
        name="John Doe",
        email="john.doe@example.com",
        address="123 Elm Street",
        phone="555-1234",
    )
    test_db.add(customer)
    test_db.commit()
    test_db.refresh(customer)
    return customer

@pytest.fixture
def products(test_db):
    """A laptop and a smartphone with 10 units each"""
    items = [
        Product(name="Laptop", price=Decimal("1000.00"), stock_quantity=10),
        Product(name="Smartphone", price=Decimal("500.00"), stock_quantity=10),
    ]
    test_db.add_all(items)
    test_db.commit()
    for item in items:
        test_db.refresh(item)
    return items
