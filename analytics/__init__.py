"""
REIT analytics engines.

List queries, detail and history lookups, dashboard aggregates and the
Gordon Growth dividend-discount valuation, all as pure reads over the
snapshot and history stores.
"""
