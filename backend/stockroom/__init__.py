"""Stockroom inventory management backend."""
