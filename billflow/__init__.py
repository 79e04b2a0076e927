"""
billflow

Billing administration backend for small businesses: clients, catalog
services, bills, quotations, payments and company settings.
"""

__version__ = "1.0.0"
