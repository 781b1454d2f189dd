"""
Sheet Ledger Command Layer — Rejections
=========================================
Refused movements are explained, never written to the log.
"""

from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    "ReasonCode",
    "RejectionReason",
]
