"""Ledger Statement Extraction System.

Rebuilds account, description, debit and credit columns from PDF ledger
statements whose text carries no table structure, and exports them to Excel.
"""

__version__ = "1.0.0"
__author__ = "Ledger Extraction Team"
