"""Storefront API application package."""
