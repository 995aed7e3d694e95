"""
Utility functions module.

Calendar helpers shared by the performance, risk and history modules, and
the lenient weight parser used by composition ingestion and classification.

Date Semantics:
- Price histories are daily series keyed by calendar date, never by time of day
- Lookback windows are measured in calendar days, not trading days
- The latest entry of a series defines "now"; wall-clock time is never used
"""
