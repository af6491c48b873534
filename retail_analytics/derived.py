"""
Project: Retail Sales Analytics
Focus: high_value_orders reporting table, materialized with CREATE TABLE AS SELECT
"""

from decimal import Decimal, InvalidOperation

import pandas as pd
from sqlalchemy import text
from sqlalchemy.engine import Engine

from retail_analytics.logger import get_logger

logger = get_logger(__name__)

HIGH_VALUE_THRESHOLD = 50000

DROP_HIGH_VALUE_ORDERS = "DROP TABLE IF EXISTS high_value_orders;"

# Some engines reject bind parameters inside DDL, so the threshold is
# rendered as a literal after validation.
CTAS_HIGH_VALUE_ORDERS = """
CREATE TABLE high_value_orders AS
SELECT
    o.order_id,
    SUM(oi.quantity * p.price) AS order_total
FROM orders o
JOIN order_items oi
  ON o.order_id = oi.order_id
JOIN products p
  ON oi.product_id = p.product_id
GROUP BY o.order_id
HAVING SUM(oi.quantity * p.price) > {threshold};
"""

QUERY_HIGH_VALUE_ORDERS = """
SELECT order_id, order_total
FROM high_value_orders
ORDER BY order_id;
"""


def validate_threshold(threshold) -> str:
    """
    Check ``threshold`` is a positive finite number and return it as a SQL literal.

    Raises:
        ValueError: If it is not.
    """
    if isinstance(threshold, bool):
        raise ValueError("threshold must be a number")
    try:
        value = Decimal(str(threshold))
    except InvalidOperation:
        raise ValueError(f"threshold must be a number, got {threshold!r}") from None
    if not value.is_finite() or value <= 0:
        raise ValueError(f"threshold must be a positive number, got {threshold!r}")
    return format(value, "f")


def create_high_value_orders(engine: Engine, threshold=HIGH_VALUE_THRESHOLD) -> None:
    """
    Rebuild high_value_orders from the orders whose total exceeds ``threshold``.

    Raises:
        ValueError: If ``threshold`` is not a positive number.
    """
    sql = CTAS_HIGH_VALUE_ORDERS.format(threshold=validate_threshold(threshold))
    with engine.begin() as conn:
        conn.execute(text(DROP_HIGH_VALUE_ORDERS))
        conn.execute(text(sql))
    logger.info(f"Table high_value_orders created (order_total > {threshold}).")


def load_high_value_orders(engine: Engine) -> pd.DataFrame:
    return pd.read_sql(text(QUERY_HIGH_VALUE_ORDERS), engine)
