"""
Project: Retail Sales Analytics – Reports (Pandas + SQL)
Focus: run every analytical query into DataFrames and export them for BI tools
"""

from pathlib import Path
from typing import Callable, Dict

import pandas as pd
from sqlalchemy import text
from sqlalchemy.engine import Engine

from retail_analytics import queries
from retail_analytics.derived import load_high_value_orders
from retail_analytics.logger import get_logger

logger = get_logger(__name__)


QUERY_CUSTOMER_SALES_SUMMARY = """
SELECT name, city, total_spent
FROM customer_sales_summary
ORDER BY total_spent DESC, name;
"""


def load_customer_sales_summary(engine: Engine) -> pd.DataFrame:
    """Read the customer_sales_summary view."""
    return pd.read_sql(text(QUERY_CUSTOMER_SALES_SUMMARY), engine)


REPORTS: Dict[str, Callable[[Engine], pd.DataFrame]] = {
    "order_totals": queries.order_totals,
    "customer_spend": queries.customer_spend,
    "top_products": queries.top_products,
    "monthly_revenue": queries.monthly_revenue,
    "customer_ranking": queries.customer_ranking,
    "top_order_per_customer": queries.top_order_per_customer,
    "running_revenue": queries.running_revenue,
    "customer_segments": queries.customer_segments,
    "customer_sales_summary": load_customer_sales_summary,
    "high_value_orders": load_high_value_orders,
}


def run_report(engine: Engine, name: str) -> pd.DataFrame:
    """
    Run a single report by name.

    Raises:
        ValueError: If ``name`` is not in REPORTS.
    """
    try:
        report = REPORTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown report '{name}'. Available: {', '.join(REPORTS)}"
        ) from None
    df = report(engine)
    logger.debug(f"Report {name}: {len(df)} rows")
    return df


def run_all(engine: Engine) -> Dict[str, pd.DataFrame]:
    return {name: run_report(engine, name) for name in REPORTS}


def export_reports(frames: Dict[str, pd.DataFrame], out_dir) -> list:
    """Write each DataFrame to ``<out_dir>/<name>.csv`` and return the paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for name, df in frames.items():
        path = out_dir / f"{name}.csv"
        df.to_csv(path, index=False)
        paths.append(path)
    logger.info(f"Exported {len(paths)} reports to {out_dir}")
    return paths
