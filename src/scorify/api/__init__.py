"""API module for Scorify.

Per the api layer boundary:
- Validates inputs, reads/writes DB
- Returns payloads for the dashboard UI
- Forbidden: aggregation logic (lives in scorify.aggregation)
"""
