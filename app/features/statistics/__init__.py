"""
Statistics feature package.

Vertical slice for the statistics dashboard: domain values, the pure
aggregation pipeline (period resolver, local aggregator, response
formatter), the Postgres record source, the two aggregation strategies,
and the HTTP router. Import the router from `.api.router` directly.
"""
