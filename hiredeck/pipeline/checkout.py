"""Simulated unlock checkout: a flat fee per saved listing.

There is no payment processor. Processing an unlock records the ids as
unlocked for the role and drops them from the saved queue.
"""

import logging
import sqlite3

from hiredeck.core.db import fetch_candidates, fetch_jobs, get_unlocked_ids, record_unlocks
from hiredeck.core.schemas import Listing, Role, UnlockReceipt, UnlockRequest
from hiredeck.pipeline.triage import SavedQueue

logger = logging.getLogger(__name__)


def build_unlock_request(role: Role, saved: SavedQueue) -> UnlockRequest:
    """Package the saved queue for checkout."""
    return UnlockRequest(role=role, items=saved.items)


class UnlockLedger:
    """Prices and records unlocks.

    Usage::

        ledger = UnlockLedger(conn, fee=2.00)
        request = build_unlock_request("employer", saved)
        ledger.quote(request)           # 2.00 per listing not yet unlocked
        receipt = ledger.process(request, saved)
    """

    def __init__(self, conn: sqlite3.Connection, fee: float) -> None:
        self._conn = conn
        self._fee = fee

    @property
    def fee(self) -> float:
        return self._fee

    def chargeable_ids(self, request: UnlockRequest) -> list[str]:
        """Ids in the request the role has not unlocked yet, in request order."""
        unlocked = get_unlocked_ids(self._conn, request.role)
        ids = dict.fromkeys(item.id for item in request.items)
        return [i for i in ids if i not in unlocked]

    def quote(self, request: UnlockRequest) -> float:
        """Amount `process` would charge for the request right now."""
        return round(len(self.chargeable_ids(request)) * self._fee, 2)

    def is_unlocked(self, role: Role, listing_id: str) -> bool:
        return listing_id in get_unlocked_ids(self._conn, role)

    def unlocked_ids(self, role: Role) -> set[str]:
        return get_unlocked_ids(self._conn, role)

    def unlocked_listings(self, role: Role) -> list[Listing]:
        """Listings the role has unlocked, in store order.

        Seekers unlock jobs and employers unlock candidates. Unlocked ids whose
        listing is no longer in the store are left out.
        """
        unlocked = get_unlocked_ids(self._conn, role)
        listings: list[Listing] = list(fetch_jobs(self._conn) if role == "seeker" else fetch_candidates(self._conn))
        return [item for item in listings if item.id in unlocked]

    def process(self, request: UnlockRequest, saved: SavedQueue | None = None) -> UnlockReceipt:
        """Unlock every item in the request.

        Items the role already unlocked are not charged again.

        Raises:
            ValueError: If the request has no items.
        """
        if not request.items:
            msg = "Nothing to unlock: the saved queue is empty"
            raise ValueError(msg)

        ids = list(dict.fromkeys(item.id for item in request.items))
        newly = record_unlocks(self._conn, request.role, ids, self._fee)
        already = [i for i in ids if i not in newly]
        total = round(len(newly) * self._fee, 2)

        if saved is not None:
            saved.remove_many(ids)

        logger.info(
            "Unlocked %d %s listings for $%.2f (%d already unlocked)",
            len(newly), "job" if request.role == "seeker" else "candidate", total, len(already),
        )
        return UnlockReceipt(
            role=request.role,
            unlocked_ids=newly,
            already_unlocked_ids=already,
            total=total,
        )
