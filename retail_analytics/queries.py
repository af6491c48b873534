"""
Project: Retail Sales Analytics (Analytical SQL)
Focus: joins, aggregation, CTEs and window functions over the sales schema
"""

import pandas as pd
from sqlalchemy import text
from sqlalchemy.engine import Engine


# Tier thresholds for QUERY_CUSTOMER_SEGMENTS.
HIGH_SPEND_THRESHOLD = 100000
MEDIUM_SPEND_THRESHOLD = 10000


# 1. ORDER & CUSTOMER TOTALS -----------------------------------------------

QUERY_ORDER_TOTALS = """
SELECT
    o.order_id,
    SUM(oi.quantity * p.price) AS order_total
FROM orders o
JOIN order_items oi
  ON o.order_id = oi.order_id
JOIN products p
  ON oi.product_id = p.product_id
GROUP BY o.order_id
ORDER BY o.order_id;
"""

QUERY_CUSTOMER_SPEND = """
SELECT
    c.customer_id,
    c.name,
    COALESCE(SUM(oi.quantity * p.price), 0) AS total_spent
FROM customers c
LEFT JOIN orders o
  ON c.customer_id = o.customer_id
LEFT JOIN order_items oi
  ON o.order_id = oi.order_id
LEFT JOIN products p
  ON oi.product_id = p.product_id
GROUP BY c.customer_id, c.name
ORDER BY total_spent DESC, c.customer_id;
"""

QUERY_TOP_PRODUCTS = """
SELECT
    p.product_name,
    SUM(oi.quantity) AS total_units_sold
FROM products p
JOIN order_items oi
  ON p.product_id = oi.product_id
GROUP BY p.product_name
ORDER BY total_units_sold DESC, p.product_name;
"""


# 2. MONTHLY REVENUE (CTE) -------------------------------------------------

# (year, month) expressions per dialect; there is no portable MONTH().
PERIOD_EXPRESSIONS = {
    "sqlite": (
        "CAST(strftime('%Y', o.order_date) AS INTEGER)",
        "CAST(strftime('%m', o.order_date) AS INTEGER)",
    ),
    "postgresql": (
        "CAST(EXTRACT(YEAR FROM o.order_date) AS INTEGER)",
        "CAST(EXTRACT(MONTH FROM o.order_date) AS INTEGER)",
    ),
    "mysql": ("YEAR(o.order_date)", "MONTH(o.order_date)"),
}

QUERY_MONTHLY_REVENUE = """
WITH monthly_sales AS (
    SELECT
        {year_expr}  AS year,
        {month_expr} AS month,
        SUM(oi.quantity * p.price) AS revenue
    FROM orders o
    JOIN order_items oi
      ON o.order_id = oi.order_id
    JOIN products p
      ON oi.product_id = p.product_id
    GROUP BY {year_expr}, {month_expr}
)
SELECT year, month, revenue
FROM monthly_sales
ORDER BY year, month;
"""


def monthly_revenue_sql(dialect: str) -> str:
    """Render QUERY_MONTHLY_REVENUE for a SQLAlchemy dialect name."""
    try:
        year_expr, month_expr = PERIOD_EXPRESSIONS[dialect]
    except KeyError:
        raise ValueError(f"No month expression for dialect '{dialect}'") from None
    return QUERY_MONTHLY_REVENUE.format(year_expr=year_expr, month_expr=month_expr)


# 3. WINDOW FUNCTIONS ------------------------------------------------------

QUERY_CUSTOMER_RANKING = """
SELECT
    c.name,
    COALESCE(SUM(oi.quantity * p.price), 0) AS total_spent,
    RANK() OVER (
        ORDER BY COALESCE(SUM(oi.quantity * p.price), 0) DESC
    ) AS spend_rank
FROM customers c
LEFT JOIN orders o
  ON c.customer_id = o.customer_id
LEFT JOIN order_items oi
  ON o.order_id = oi.order_id
LEFT JOIN products p
  ON oi.product_id = p.product_id
GROUP BY c.customer_id, c.name
ORDER BY spend_rank, c.name;
"""

QUERY_TOP_ORDER_PER_CUSTOMER = """
SELECT customer_id, order_id, order_total
FROM (
    SELECT
        o.customer_id,
        o.order_id,
        SUM(oi.quantity * p.price) AS order_total,
        ROW_NUMBER() OVER (
            PARTITION BY o.customer_id
            ORDER BY SUM(oi.quantity * p.price) DESC, o.order_id
        ) AS rn
    FROM orders o
    JOIN order_items oi
      ON o.order_id = oi.order_id
    JOIN products p
      ON oi.product_id = p.product_id
    GROUP BY o.customer_id, o.order_id
) t
WHERE rn = 1
ORDER BY customer_id;
"""

QUERY_RUNNING_REVENUE = """
WITH order_totals AS (
    SELECT
        o.order_id,
        o.order_date,
        SUM(oi.quantity * p.price) AS order_total
    FROM orders o
    JOIN order_items oi
      ON o.order_id = oi.order_id
    JOIN products p
      ON oi.product_id = p.product_id
    GROUP BY o.order_id, o.order_date
)
SELECT
    order_id,
    order_date,
    order_total,
    SUM(order_total) OVER (
        ORDER BY order_date, order_id
        ROWS BETWEEN UNBOUNDED PRECEDING AND CURRENT ROW
    ) AS running_revenue
FROM order_totals
ORDER BY order_date, order_id;
"""


# 4. SEGMENTATION & LOOKUPS ------------------------------------------------

QUERY_CUSTOMER_SEGMENTS = f"""
WITH customer_spend AS (
    SELECT
        c.customer_id,
        c.name,
        COALESCE(SUM(oi.quantity * p.price), 0) AS total_spent
    FROM customers c
    LEFT JOIN orders o
      ON c.customer_id = o.customer_id
    LEFT JOIN order_items oi
      ON o.order_id = oi.order_id
    LEFT JOIN products p
      ON oi.product_id = p.product_id
    GROUP BY c.customer_id, c.name
)
SELECT
    customer_id,
    name,
    total_spent,
    CASE
        WHEN total_spent >= {HIGH_SPEND_THRESHOLD} THEN 'High'
        WHEN total_spent >= {MEDIUM_SPEND_THRESHOLD} THEN 'Medium'
        ELSE 'Low'
    END AS segment
FROM customer_spend
ORDER BY total_spent DESC, customer_id;
"""

QUERY_CUSTOMER_ORDERS = """
SELECT
    o.order_id,
    o.order_date,
    SUM(oi.quantity * p.price) AS order_value
FROM orders o
JOIN order_items oi
  ON o.order_id = oi.order_id
JOIN products p
  ON oi.product_id = p.product_id
WHERE o.customer_id = :customer_id
GROUP BY o.order_id, o.order_date
ORDER BY o.order_date, o.order_id;
"""


# 5. RUNNERS ---------------------------------------------------------------

def _read(engine: Engine, sql: str, params: dict = None) -> pd.DataFrame:
    return pd.read_sql(text(sql), engine, params=params)


def order_totals(engine: Engine) -> pd.DataFrame:
    return _read(engine, QUERY_ORDER_TOTALS)


def customer_spend(engine: Engine) -> pd.DataFrame:
    return _read(engine, QUERY_CUSTOMER_SPEND)


def top_products(engine: Engine) -> pd.DataFrame:
    return _read(engine, QUERY_TOP_PRODUCTS)


def monthly_revenue(engine: Engine) -> pd.DataFrame:
    return _read(engine, monthly_revenue_sql(engine.dialect.name))


def customer_ranking(engine: Engine) -> pd.DataFrame:
    return _read(engine, QUERY_CUSTOMER_RANKING)


def top_order_per_customer(engine: Engine) -> pd.DataFrame:
    return _read(engine, QUERY_TOP_ORDER_PER_CUSTOMER)


def running_revenue(engine: Engine) -> pd.DataFrame:
    return _read(engine, QUERY_RUNNING_REVENUE)


def customer_segments(engine: Engine) -> pd.DataFrame:
    return _read(engine, QUERY_CUSTOMER_SEGMENTS)

