import enum
import os


class StockPolicy(str, enum.Enum):
    """Stock floor applied when an order item is inserted"""
    REJECT = "reject"
    CLAMP = "clamp"
    BACKORDER = "backorder"


def parse_stock_policy(value) -> StockPolicy:
    """Case-insensitive lookup; unknown values fail with the accepted choices listed"""
    if isinstance(value, StockPolicy):
        return value
    normalized = str(value).strip().lower()
    try:
        return StockPolicy(normalized)
    except ValueError:
        choices = ", ".join(policy.value for policy in StockPolicy)
        raise ValueError(
            f"Invalid STOCK_POLICY {value!r}; expected one of: {choices}"
        ) from None


STOCK_POLICY = parse_stock_policy(os.getenv("STOCK_POLICY", "reject"))

INACTIVE_WINDOW_DAYS = int(os.getenv("INACTIVE_WINDOW_DAYS", "30"))
BEST_SELLER_LIMIT = int(os.getenv("BEST_SELLER_LIMIT", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
