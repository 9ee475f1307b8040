"""
Household Ledger - Source Package

The money core of a household/group organizer: turns the IOUs recorded
inside a group into a short per-currency settlement plan.

DESIGN PRINCIPLES:
1. Each currency is its own ledger, never converted
2. A bad record is skipped, it never blocks the whole group
3. Same input, same plan
4. Storage and UI stay outside
"""

__version__ = "1.0.0"
__author__ = "Household Ledger Team"
