"""
BuildLedger - Source Package

Construction accounting for small contractors in Bangladesh:
expenses and income, weekly labor payroll, material estimates,
invoices, budgets, tax arithmetic and backups.

DESIGN PRINCIPLES:
1. Calculations are pure functions over plain records
2. Every collection lives under one key of a key-value store
3. Reads degrade gracefully, writes fail loudly
4. Every persisted change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "BuildLedger Team"
