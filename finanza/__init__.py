"""Finanza ledger: personal and family finance accounting core."""
