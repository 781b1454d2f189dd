"""
Sheet Ledger Engine — Public API
==================================
Balance reducer, running-balance projector and movement policies.
Everything here is a pure function of the event snapshot passed in.
"""

from engines.sheet_ledger.policies import (
    evaluate_movement_policies,
    known_item_policy,
    pool_availability_policy,
)
from engines.sheet_ledger.reducer import (
    Balance,
    events_for_customer,
    pool_deltas,
    reduce_balance,
    reduce_by_customer,
    reduce_by_item,
)
from engines.sheet_ledger.running import (
    HistoryEntry,
    HistoryOrder,
    order_history,
    project_history,
    running_balances,
)

__all__ = [
    "Balance",
    "pool_deltas",
    "reduce_balance",
    "reduce_by_item",
    "reduce_by_customer",
    "events_for_customer",
    "HistoryEntry",
    "HistoryOrder",
    "project_history",
    "running_balances",
    "order_history",
    "known_item_policy",
    "pool_availability_policy",
    "evaluate_movement_policies",
]
