"""Background jobs for the credit ledger"""
from .ledger_reconciler import LedgerReconciler

__all__ = ["LedgerReconciler"]
