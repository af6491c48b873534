"""
Project: Retail Sales Analytics
Focus: build the whole database in one go (tables, sample data, summary view,
high_value_orders and, where supported, the customer orders routine)
"""

from sqlalchemy.engine import Engine

from retail_analytics.derived import (
    HIGH_VALUE_THRESHOLD,
    create_high_value_orders,
    validate_threshold,
)
from retail_analytics.logger import get_logger
from retail_analytics.procedures import install_customer_orders_routine
from retail_analytics.sample_data import load_sample_data
from retail_analytics.schema import bootstrap_schema, create_views, drop_schema

logger = get_logger(__name__)


def build_database(engine: Engine, threshold=HIGH_VALUE_THRESHOLD, reset: bool = False) -> None:
    """
    Create and populate the retail database.

    Args:
        engine: Target engine.
        threshold: order_total cut-off for high_value_orders.
        reset: Drop existing objects first. Without it, running twice fails
            on the sample data's primary keys.

    Raises:
        ValueError: If ``threshold`` is invalid. Checked before anything is
            written.
    """
    validate_threshold(threshold)
    if reset:
        drop_schema(engine)
    bootstrap_schema(engine)
    load_sample_data(engine)
    create_views(engine)
    create_high_value_orders(engine, threshold)
    install_customer_orders_routine(engine)
    logger.info(f"Retail database ready at {engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    from retail_analytics.config import HIGH_VALUE_THRESHOLD as CONFIGURED_THRESHOLD, get_engine

    build_database(get_engine(), CONFIGURED_THRESHOLD, reset=True)
    print("Retail schema, sample data, view and reporting table created successfully.")
