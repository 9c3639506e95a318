"""
Payroll admin backend: settings API, seeding and payroll maintenance tools.
"""

__version__ = "1.0.0"
