import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from src.api.routes import customers, orders, payments, products, reports, reviews
from src.core import config
from src.core.database import Base, engine

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing tables are created so `uvicorn main:app` works on an empty database
    Base.metadata.create_all(bind=engine)
    yield

app = FastAPI(
    title="Order Management Backend",
    description="Customers, products, orders, payments, reviews and sales reports",
    version="1.0.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(customers.router, prefix="/api/v1/customers", tags=["customers"])
app.include_router(products.router, prefix="/api/v1/products", tags=["products"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["orders"])
app.include_router(payments.router, prefix="/api/v1/payments", tags=["payments"])
app.include_router(reviews.router, prefix="/api/v1/reviews", tags=["reviews"])
app.include_router(reports.router, prefix="/api/v1/reports", tags=["reports"])

@app.get("/")
async def root():
    return {"message": "Order Management Backend API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
