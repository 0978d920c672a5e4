"""
Budget Tracker - Core Package

The non-UI core of a personal budget tracker: transactions tagged with a
category, per-category chart data, currency formatting, a budget alert and
a single local account.

DESIGN PRINCIPLES:
1. Derived views are recomputed, never cached
2. One owner per persisted key
3. Persistence failures are logged, never fatal
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Budget Tracker Team"
