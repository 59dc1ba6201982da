"""Report aggregation module.

Reads campaigns and lead scores through the repository and reduces them
in memory:
- monthly.py: 12-month decision breakdown
- summary.py: current-month KPIs, score bands and month-over-month growth
- Forbidden: writes to any table
"""
