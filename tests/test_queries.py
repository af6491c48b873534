"""Tests for the analytical queries against the sample data."""

import pytest
from sqlalchemy import text

from retail_analytics import queries


def _as_dict(df, key, value):
    return dict(zip(df[key], df[value]))


class TestTotals:
    """Tests for order, customer and product aggregates."""

    def test_order_totals(self, engine):
        df = queries.order_totals(engine)
        assert _as_dict(df, "order_id", "order_total") == {
            1001: 59000,
            1002: 7000,
            1003: 57000,
        }

    def test_customer_spend_includes_customers_without_orders(self, engine):
        """Test Meena shows up with zero spend."""
        df = queries.customer_spend(engine)
        assert _as_dict(df, "name", "total_spent") == {
            "Asha": 116000,
            "Ravi": 7000,
            "Meena": 0,
        }
        assert list(df["name"]) == ["Asha", "Ravi", "Meena"]

    def test_top_products_by_units(self, engine):
        df = queries.top_products(engine)
        assert list(zip(df["product_name"], df["total_units_sold"])) == [
            ("Headphones", 3),
            ("Laptop", 2),
            ("Office Chair", 1),
        ]


class TestMonthlyRevenue:
    """Tests for the CTE-based monthly rollup."""

    def test_single_month(self, engine):
        df = queries.monthly_revenue(engine)
        assert len(df) == 1
        row = df.iloc[0]
        assert (row["year"], row["month"], row["revenue"]) == (2025, 1, 123000)

    def test_postgres_rendering_uses_extract(self):
        sql = queries.monthly_revenue_sql("postgresql")
        assert "EXTRACT(MONTH FROM o.order_date)" in sql
        assert "{" not in sql

    @pytest.mark.parametrize("dialect", ["oracle", "mssql"])
    def test_unsupported_dialect(self, dialect):
        with pytest.raises(ValueError, match=dialect):
            queries.monthly_revenue_sql(dialect)


class TestWindowFunctions:
    """Tests for RANK, ROW_NUMBER and running SUM queries."""

    def test_customer_ranking(self, engine):
        df = queries.customer_ranking(engine)
        assert _as_dict(df, "name", "spend_rank") == {"Asha": 1, "Ravi": 2, "Meena": 3}

    def test_top_order_per_customer(self, engine):
        df = queries.top_order_per_customer(engine)
        assert _as_dict(df, "customer_id", "order_id") == {1: 1001, 2: 1002}
        assert _as_dict(df, "customer_id", "order_total") == {1: 59000, 2: 7000}

    def test_running_revenue(self, engine):
        df = queries.running_revenue(engine)
        assert list(df["order_id"]) == [1001, 1002, 1003]
        assert list(df["running_revenue"]) == [59000, 66000, 123000]


class TestSegments:
    """Tests for the spend tier classification."""

    def test_customer_segments(self, engine):
        df = queries.customer_segments(engine)
        assert _as_dict(df, "name", "segment") == {
            "Asha": "High",
            "Ravi": "Low",
            "Meena": "Low",
        }

    def test_medium_tier(self, engine):
        """Test a customer crossing the middle threshold moves up a tier."""
        with engine.begin() as conn:
            conn.execute(text("INSERT INTO orders VALUES (1004, 2, '2025-02-03')"))
            conn.execute(text("INSERT INTO order_items VALUES (6, 1004, 102, 2)"))

        df = queries.customer_segments(engine)
        segments = _as_dict(df, "name", "segment")
        assert segments["Ravi"] == "Medium"
        assert _as_dict(df, "name", "total_spent")["Ravi"] == 11000

    def _add_order(self, engine, order_id, customer_id, product_id, price, quantity=1):
        """Add a one-line order for a new product with the given price."""
        with engine.begin() as conn:
            conn.execute(
                text("INSERT INTO products VALUES (:id, :name, 'Test', :price)"),
                {"id": product_id, "name": f"Product {product_id}", "price": price},
            )
            conn.execute(
                text("INSERT INTO orders VALUES (:id, :customer_id, '2025-03-01')"),
                {"id": order_id, "customer_id": customer_id},
            )
            conn.execute(
                text("INSERT INTO order_items VALUES (:id, :order_id, :product_id, :quantity)"),
                {"id": order_id, "order_id": order_id, "product_id": product_id, "quantity": quantity},
            )

    def test_medium_threshold_is_inclusive(self, engine):
        """Test spending exactly the middle threshold is Medium."""
        self._add_order(engine, 2001, 3, 201, queries.MEDIUM_SPEND_THRESHOLD)

        df = queries.customer_segments(engine)
        assert _as_dict(df, "name", "total_spent")["Meena"] == 10000
        assert _as_dict(df, "name", "segment")["Meena"] == "Medium"

    def test_just_below_medium_threshold_is_low(self, engine):
        self._add_order(engine, 2001, 3, 201, queries.MEDIUM_SPEND_THRESHOLD - 1)

        df = queries.customer_segments(engine)
        assert _as_dict(df, "name", "segment")["Meena"] == "Low"

    def test_high_threshold_is_inclusive(self, engine):
        """Test Ravi reaching exactly the top threshold is High."""
        self._add_order(engine, 2002, 2, 202, queries.HIGH_SPEND_THRESHOLD - 7000)

        df = queries.customer_segments(engine)
        assert _as_dict(df, "name", "total_spent")["Ravi"] == 100000
        assert _as_dict(df, "name", "segment")["Ravi"] == "High"
