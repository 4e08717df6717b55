"""
Fortnight Budget - Source Package

A personal budgeting core that turns bills and savings goals on any
billing frequency into a single fortnightly "safe to spend" figure.

DESIGN PRINCIPLES:
1. Everything is normalized to fortnights
2. Calculations are pure: records in, numbers out
3. Money is Decimal, never float
4. Storage layer is swappable
5. Every change to a record is auditable
"""

__version__ = "1.0.0"
__author__ = "Fortnight Budget Team"
