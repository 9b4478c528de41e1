"""Aggregation and filtering pipeline for warehouse and retail sales dashboards."""

__version__ = "0.1.0"
