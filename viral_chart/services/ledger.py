"""Rune balance owned by the presenter."""

import logging

logger = logging.getLogger(__name__)


class RuneLedger:
    """
    Non-negative rune balance.

    The ledger is only ever credited with reward deltas computed by the core;
    it is never shared between processes or persisted.
    """

    def __init__(self, balance: int = 0):
        if balance < 0:
            raise ValueError(f"Starting balance must be non-negative, got {balance}")
        self._balance = balance

    @property
    def balance(self) -> int:
        return self._balance

    def credit(self, runes: int) -> int:
        """
        Add a reward to the balance.

        Args:
            runes: Runes awarded for one submission

        Returns:
            int: The new balance
        """
        if runes < 0:
            raise ValueError(f"Rune credit must be non-negative, got {runes}")
        self._balance += runes
        logger.debug(f"Credited {runes} runes, balance is now {self._balance}")
        return self._balance
