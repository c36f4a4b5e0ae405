from helpers.naive_reconcile import (
    NaiveLCS,
    ScriptReport,
    ScriptVerifier,
    naive_lis_length,
    minimum_moves,
    verify_script,
    lcs_length,
)


__all__ = [
    "NaiveLCS",
    "ScriptReport",
    "ScriptVerifier",
    "naive_lis_length",
    "minimum_moves",
    "verify_script",
    "lcs_length",
]
