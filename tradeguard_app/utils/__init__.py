"""
Utility functions module.

Symbol normalization, trading-day time windows and JSON-ready
serialization of result records.

Time Semantics:
- Report dates are calendar days in UTC unless a timezone is supplied
- History windows are closed intervals [day start, day end]
"""
