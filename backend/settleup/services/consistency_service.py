"""
Consistency checks between the raw and simplified debt views.
"""
import logging
from decimal import Decimal
from typing import Iterable

from settleup.core.exceptions import InconsistencyError
from settleup.core.money import EPSILON, ZERO, round_money
from settleup.schemas.balance import RawDebt, SimplifiedDebt
from settleup.services.net_balance_service import net_balance_map

logger = logging.getLogger(__name__)


def assert_consistent(
    raw: Iterable[RawDebt],
    simplified: Iterable[SimplifiedDebt],
    tolerance: Decimal = EPSILON
) -> None:
    """
    Verify both views imply the same net balance for every user.

    Raises InconsistencyError listing (raw, simplified) balances for each
    user that differs by more than tolerance (epsilon by default).
    """
    raw_map = net_balance_map(raw)
    simplified_map = net_balance_map(simplified)

    mismatches = {}
    for user_id in list(raw_map) + [u for u in simplified_map if u not in raw_map]:
        raw_balance = raw_map.get(user_id, ZERO)
        simplified_balance = simplified_map.get(user_id, ZERO)
        if abs(raw_balance - simplified_balance) > tolerance:
            mismatches[user_id] = (round_money(raw_balance), round_money(simplified_balance))

    if mismatches:
        logger.error(f"Raw and simplified balances disagree: {mismatches}")
        raise InconsistencyError(
            f"Raw and simplified debts disagree for {len(mismatches)} user(s)",
            mismatches=mismatches
        )
