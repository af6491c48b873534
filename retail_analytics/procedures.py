"""
Project: Retail Sales Analytics
Focus: customer orders lookup, as a stored routine where the engine has one
and as a parameterized query everywhere
"""

import pandas as pd
from sqlalchemy import text
from sqlalchemy.engine import Engine

from retail_analytics.logger import get_logger
from retail_analytics.queries import QUERY_CUSTOMER_ORDERS

logger = get_logger(__name__)

ROUTINE_NAME = "get_customer_orders"

# Routine syntax differs per engine and SQLite has none at all; dialects
# missing here fall back to customer_orders().
PROCEDURE_SQL = {
    "postgresql": [
        """
CREATE OR REPLACE FUNCTION get_customer_orders(p_customer_id INT)
RETURNS TABLE (order_id INT, order_date DATE, order_value NUMERIC) AS $$
    SELECT
        o.order_id,
        o.order_date,
        SUM(oi.quantity * p.price) AS order_value
    FROM orders o
    JOIN order_items oi
      ON o.order_id = oi.order_id
    JOIN products p
      ON oi.product_id = p.product_id
    WHERE o.customer_id = p_customer_id
    GROUP BY o.order_id, o.order_date;
$$ LANGUAGE sql;
""",
    ],
}

DROP_PROCEDURE_SQL = {
    "postgresql": ["DROP FUNCTION IF EXISTS get_customer_orders(INT);"],
}


def install_customer_orders_routine(engine: Engine) -> bool:
    """
    Install the customer orders routine on engines that support one.

    Returns:
        True if the routine was installed, False if the dialect has none.
    """
    statements = PROCEDURE_SQL.get(engine.dialect.name)
    if statements is None:
        logger.info(
            f"No stored routine for dialect '{engine.dialect.name}'; "
            "use customer_orders() instead."
        )
        return False
    with engine.begin() as conn:
        for sql in statements:
            conn.execute(text(sql))
    logger.info(f"Stored routine {ROUTINE_NAME} installed.")
    return True


def drop_customer_orders_routine(engine: Engine) -> bool:
    """Drop the routine if the dialect has one. Returns False otherwise."""
    statements = DROP_PROCEDURE_SQL.get(engine.dialect.name)
    if statements is None:
        return False
    with engine.begin() as conn:
        for sql in statements:
            conn.execute(text(sql))
    logger.info(f"Stored routine {ROUTINE_NAME} dropped.")
    return True


def customer_orders(engine: Engine, customer_id: int) -> pd.DataFrame:
    """Orders and their value for one customer; empty if it has none."""
    return pd.read_sql(
        text(QUERY_CUSTOMER_ORDERS), engine, params={"customer_id": int(customer_id)}
    )
