"""
REST API for REIT analytics.

Exposes REIT snapshots, price history and dividend-discount valuations
over HTTP for dashboards and other clients.
"""

__version__ = "1.0.0"
