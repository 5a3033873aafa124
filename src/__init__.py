"""Freight rates manager application package."""
