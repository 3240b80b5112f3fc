"""
Personal Finance Tracker - Source Package

A small personal finance tracker: register, log in, record income and
expense transactions, and see totals, monthly averages and charts.

DESIGN PRINCIPLES:
1. Forms validate before anything reaches a store
2. The session is an explicit value, never ambient state
3. Derived figures are recomputed from transactions on every read
4. Every store operation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Tracker Team"
