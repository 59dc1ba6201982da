"""CRM module.

Customer table and detail views, campaign and interaction logging, sales accounts,
dashboard counters and CSV export.
- Reads and writes go through db.repo
- Forbidden: report aggregation (see scorify.aggregation)
"""
