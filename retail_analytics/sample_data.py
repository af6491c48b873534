"""
Project: Retail Sales Analytics
Focus: static sample rows for the retail schema, loaded once and never updated
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from retail_analytics.logger import get_logger

logger = get_logger(__name__)


CUSTOMERS = [
    {"customer_id": 1, "name": "Asha", "city": "Delhi", "email": "asha@mail.com"},
    {"customer_id": 2, "name": "Ravi", "city": "Mumbai", "email": "ravi@mail.com"},
    {"customer_id": 3, "name": "Meena", "city": "Chennai", "email": "meena@mail.com"},
]

PRODUCTS = [
    {"product_id": 101, "product_name": "Laptop", "category": "Electronics", "price": 55000},
    {"product_id": 102, "product_name": "Headphones", "category": "Electronics", "price": 2000},
    {"product_id": 103, "product_name": "Office Chair", "category": "Furniture", "price": 7000},
]

# Dates as ISO strings so every driver binds them the same way.
ORDERS = [
    {"order_id": 1001, "customer_id": 1, "order_date": "2025-01-10"},
    {"order_id": 1002, "customer_id": 2, "order_date": "2025-01-12"},
    {"order_id": 1003, "customer_id": 1, "order_date": "2025-01-15"},
]

ORDER_ITEMS = [
    {"order_item_id": 1, "order_id": 1001, "product_id": 101, "quantity": 1},
    {"order_item_id": 2, "order_id": 1001, "product_id": 102, "quantity": 2},
    {"order_item_id": 3, "order_id": 1002, "product_id": 103, "quantity": 1},
    {"order_item_id": 4, "order_id": 1003, "product_id": 101, "quantity": 1},
    {"order_item_id": 5, "order_id": 1003, "product_id": 102, "quantity": 1},
]

INSERT_CUSTOMER = """
INSERT INTO customers (customer_id, name, city, email)
VALUES (:customer_id, :name, :city, :email);
"""

INSERT_PRODUCT = """
INSERT INTO products (product_id, product_name, category, price)
VALUES (:product_id, :product_name, :category, :price);
"""

INSERT_ORDER = """
INSERT INTO orders (order_id, customer_id, order_date)
VALUES (:order_id, :customer_id, :order_date);
"""

INSERT_ORDER_ITEM = """
INSERT INTO order_items (order_item_id, order_id, product_id, quantity)
VALUES (:order_item_id, :order_id, :product_id, :quantity);
"""

SAMPLE_ROWS = [
    ("customers", INSERT_CUSTOMER, CUSTOMERS),
    ("products", INSERT_PRODUCT, PRODUCTS),
    ("orders", INSERT_ORDER, ORDERS),
    ("order_items", INSERT_ORDER_ITEM, ORDER_ITEMS),
]


def load_sample_data(engine: Engine) -> None:
    """
    Insert the sample rows in one transaction.

    Raises:
        sqlalchemy.exc.IntegrityError: If the engine rejects a row
            (duplicate key, unknown reference, non-positive price or quantity).
            Nothing is inserted in that case.
    """
    try:
        with engine.begin() as conn:
            for table, sql, rows in SAMPLE_ROWS:
                conn.execute(text(sql), rows)
                logger.debug(f"Inserted {len(rows)} rows into {table}")
    except IntegrityError as e:
        logger.error(f"Failed to load sample data: {e.orig}")
        raise
    logger.info("Sample data loaded.")
