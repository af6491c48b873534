"""
Project: SQL – Retail Sales Analytics
Focus: four-table sales schema (customers, products, orders, order_items)
and the reusable customer summary view
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine

from retail_analytics.derived import DROP_HIGH_VALUE_ORDERS
from retail_analytics.logger import get_logger
from retail_analytics.procedures import drop_customer_orders_routine

logger = get_logger(__name__)


# 1. CORE TABLES -----------------------------------------------------------

DDL_CUSTOMERS = """
CREATE TABLE IF NOT EXISTS customers (
    customer_id INT PRIMARY KEY,
    name        VARCHAR(50) NOT NULL,
    city        VARCHAR(50),
    email       VARCHAR(100) UNIQUE
);
"""

DDL_PRODUCTS = """
CREATE TABLE IF NOT EXISTS products (
    product_id   INT PRIMARY KEY,
    product_name VARCHAR(100) NOT NULL,
    category     VARCHAR(50),
    price        DECIMAL(10,2) CHECK (price > 0)
);
"""

DDL_ORDERS = """
CREATE TABLE IF NOT EXISTS orders (
    order_id    INT PRIMARY KEY,
    customer_id INT,
    order_date  DATE,
    FOREIGN KEY (customer_id) REFERENCES customers(customer_id)
);
"""

DDL_ORDER_ITEMS = """
CREATE TABLE IF NOT EXISTS order_items (
    order_item_id INT PRIMARY KEY,
    order_id      INT,
    product_id    INT,
    quantity      INT CHECK (quantity > 0),
    FOREIGN KEY (order_id) REFERENCES orders(order_id),
    FOREIGN KEY (product_id) REFERENCES products(product_id)
);
"""

# Parents before children.
DDL_CORE_TABLES = [DDL_CUSTOMERS, DDL_PRODUCTS, DDL_ORDERS, DDL_ORDER_ITEMS]

CORE_TABLES = ["customers", "products", "orders", "order_items"]


# 2. VIEW ------------------------------------------------------------------

VIEW_CUSTOMER_SALES_SUMMARY = """
CREATE VIEW customer_sales_summary AS
SELECT
    c.name,
    c.city,
    SUM(oi.quantity * p.price) AS total_spent
FROM customers c
JOIN orders o
  ON c.customer_id = o.customer_id
JOIN order_items oi
  ON o.order_id = oi.order_id
JOIN products p
  ON oi.product_id = p.product_id
GROUP BY c.name, c.city;
"""

DROP_VIEW_CUSTOMER_SALES_SUMMARY = "DROP VIEW IF EXISTS customer_sales_summary;"


def bootstrap_schema(engine: Engine) -> None:
    """Create the four core tables. Safe to call multiple times."""
    with engine.begin() as conn:
        for ddl in DDL_CORE_TABLES:
            conn.execute(text(ddl))
    logger.info(f"Core tables ready: {', '.join(CORE_TABLES)}")


def create_views(engine: Engine) -> None:
    """(Re)create the customer_sales_summary view."""
    with engine.begin() as conn:
        conn.execute(text(DROP_VIEW_CUSTOMER_SALES_SUMMARY))
        conn.execute(text(VIEW_CUSTOMER_SALES_SUMMARY))
    logger.info("View customer_sales_summary created.")


def drop_schema(engine: Engine) -> None:
    """
    Drop the customer orders routine, the derived table, the view and the
    core tables, children first. Missing objects are skipped.
    """
    drop_customer_orders_routine(engine)
    with engine.begin() as conn:
        conn.execute(text(DROP_HIGH_VALUE_ORDERS))
        conn.execute(text(DROP_VIEW_CUSTOMER_SALES_SUMMARY))
        for table in reversed(CORE_TABLES):
            conn.execute(text(f"DROP TABLE IF EXISTS {table};"))
    logger.info("Retail schema dropped.")
