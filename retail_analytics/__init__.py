"""
Retail Sales Analytics: four-table sales schema, sample data and the SQL
reports built on top of it.
"""

__version__ = "0.1.0"
