"""
Spending Tracker

A personal spending journal: log dated spending entries under categories
and view totals and chart series by day, week or month.

DESIGN PRINCIPLES:
1. Records are append-only and immutable
2. Every mutation is written through to storage immediately
3. Aggregation is pure and recomputed on demand
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Spending Tracker Team"
