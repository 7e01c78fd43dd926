"""Endpoint modules, one per feed resource."""
