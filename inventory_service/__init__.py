"""Inventory service: products and categories over a REST API backed by MongoDB."""
