"""
Settlement Comparison Framework

Tools for comparing Python engine output against FateEcho.sol settlements.
"""

from .seed_verifier import (
    Discrepancy,
    VerificationReport,
    verify_battle,
    verify_card_table,
    verify_constants,
    verify_catalog,
)
