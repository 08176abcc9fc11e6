from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from algokit_utils import AlgoAmount, PaymentParams
from algosdk.error import AlgodHTTPError

if TYPE_CHECKING:  # pragma: no cover
    from algokit_utils import AlgorandClient

logger = logging.getLogger(__name__)


class Ledger(Protocol):
    """
    Currency transfer collaborator invoked once per mint.

    Implementations return False when the transfer did not happen; they must not
    leave a partial transfer behind.
    """

    def transfer(self, amount: int, sender: str, receiver: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class LedgerTransfer:
    amount: int
    sender: str
    receiver: str


@dataclass(slots=True)
class InMemoryLedger:
    """
    Ledger kept in process memory.

    Without `balances` every transfer succeeds and is only recorded. With `balances`,
    senders must hold at least `amount` and balances move on success.
    """

    balances: dict[str, int] | None = None
    reject_transfers: bool = False
    transfers: list[LedgerTransfer] = field(default_factory=list)

    def transfer(self, amount: int, sender: str, receiver: str) -> bool:
        if amount < 0:
            raise ValueError("amount must be non-negative")
        if self.reject_transfers:
            return False
        if self.balances is not None:
            available = self.balances.get(sender, 0)
            if available < amount:
                return False
            self.balances[sender] = available - amount
            self.balances[receiver] = self.balances.get(receiver, 0) + amount
        self.transfers.append(LedgerTransfer(amount, sender, receiver))
        return True

    def balance_of(self, account: str) -> int:
        if self.balances is None:
            return 0
        return self.balances.get(account, 0)


@dataclass(slots=True)
class AlgorandPaymentLedger:
    """
    Settle mint fees as ALGO payments through an AlgoKit `AlgorandClient`.

    The sender's signer must already be registered with the client's account manager.
    Algod rejections (e.g. overspend) are reported as a failed transfer; any other
    error propagates.
    """

    algorand: AlgorandClient

    def transfer(self, amount: int, sender: str, receiver: str) -> bool:
        if amount < 0:
            raise ValueError("amount must be non-negative")
        try:
            self.algorand.send.payment(
                PaymentParams(
                    sender=sender,
                    receiver=receiver,
                    amount=AlgoAmount(micro_algo=amount),
                )
            )
        except AlgodHTTPError as e:
            logger.warning(
                "Payment of %d microALGO from %s to %s rejected: %s",
                amount,
                sender,
                receiver,
                e,
            )
            return False
        return True
