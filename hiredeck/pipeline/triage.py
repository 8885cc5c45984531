"""Swipe triage over a filtered deck of listings.

Four collections drive a browse screen:
  - the deck (filtered listings) and a cursor into it
  - the saved queue (feeds checkout; survives deck resets)
  - the passed bin (skipped listings)
  - the recovery queue (listings pulled back out of the bin)

The deck state is exactly one of Recovering, Reviewing or Exhausted.
Recovering always wins: recovered listings are reviewed before the cursor
resumes over the deck. Every action dispatches on that state, never on the
individual collections.

An id is never in the saved queue and the passed bin at the same time.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict

from hiredeck.core.schemas import Candidate, Job, Listing

logger = logging.getLogger(__name__)

SWIPE_THRESHOLD_PX = 110

SwipeAction = Literal["save", "skip"]


class Recovering(BaseModel):
    """Reviewing listings pulled back from the passed bin."""

    model_config = ConfigDict(frozen=True)

    state: Literal["recovering"] = "recovering"
    item: Job | Candidate
    depth: int


class Reviewing(BaseModel):
    """Reviewing the deck at ``cursor``."""

    model_config = ConfigDict(frozen=True)

    state: Literal["reviewing"] = "reviewing"
    cursor: int
    item: Job | Candidate


class Exhausted(BaseModel):
    """No current listing: the cursor sits at the end of the deck."""

    model_config = ConfigDict(frozen=True)

    state: Literal["exhausted"] = "exhausted"
    cursor: int


DeckState = Recovering | Reviewing | Exhausted


def resolve_swipe(offset_px: float, threshold: float = SWIPE_THRESHOLD_PX) -> SwipeAction | None:
    """Map a drag release to an action.

    Past ``threshold`` to the right saves, past it to the left skips;
    anything closer snaps back (None).
    """
    if offset_px > threshold:
        return "save"
    if offset_px < -threshold:
        return "skip"
    return None


class SavedQueue:
    """Ordered listings saved for unlock, unique by id.

    Shared between a browse screen and checkout.
    """

    def __init__(self, items: Iterable[Listing] = ()) -> None:
        self._items: list[Listing] = []
        for item in items:
            self.add(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Listing]:
        return iter(list(self._items))

    def __contains__(self, listing_id: object) -> bool:
        return any(item.id == listing_id for item in self._items)

    @property
    def items(self) -> list[Listing]:
        return list(self._items)

    @property
    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    def add(self, item: Listing) -> bool:
        """Append ``item`` unless its id is already saved. Returns True if added."""
        if item.id in self:
            return False
        self._items.append(item)
        return True

    def remove(self, listing_id: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if item.id != listing_id]
        return len(self._items) != before

    def toggle(self, item: Listing) -> bool:
        """Remove ``item`` if saved, otherwise save it. Returns True if now saved."""
        if self.remove(item.id):
            return False
        self._items.append(item)
        return True

    def remove_many(self, listing_ids: Iterable[str]) -> list[Listing]:
        ids = set(listing_ids)
        removed = [item for item in self._items if item.id in ids]
        self._items = [item for item in self._items if item.id not in ids]
        return removed

    def clear(self) -> None:
        self._items.clear()


class TriageQueue:
    """Cursor, passed bin and recovery queue for one browse screen.

    Usage::

        queue = TriageQueue(filtered_jobs, saved)
        queue.skip()          # swipe left
        queue.save()          # swipe right
        queue.recover("job_1")
        queue.current         # recovered listing first, then the deck
    """

    def __init__(
        self,
        listings: Sequence[Listing],
        saved: SavedQueue | None = None,
        query: str = "",
    ) -> None:
        self._deck: list[Listing] = list(listings)
        self._cursor = 0
        self._passed: list[Listing] = []
        self._recovery: list[Listing] = []
        self._query = query
        self.saved = saved if saved is not None else SavedQueue()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def deck(self) -> tuple[Listing, ...]:
        return tuple(self._deck)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def passed(self) -> tuple[Listing, ...]:
        return tuple(self._passed)

    @property
    def recovery(self) -> tuple[Listing, ...]:
        return tuple(self._recovery)

    @property
    def state(self) -> DeckState:
        if self._recovery:
            return Recovering(item=self._recovery[0], depth=len(self._recovery))
        if self._cursor < len(self._deck):
            return Reviewing(cursor=self._cursor, item=self._deck[self._cursor])
        return Exhausted(cursor=self._cursor)

    @property
    def current(self) -> Listing | None:
        state = self.state
        if isinstance(state, Exhausted):
            return None
        return state.item

    @property
    def can_undo(self) -> bool:
        """Undo only reverses deck passes, so it is off while recovering."""
        return bool(self._passed) and isinstance(self.state, (Reviewing, Exhausted))

    # ------------------------------------------------------------------
    # Deck lifecycle
    # ------------------------------------------------------------------

    def reset(self, listings: Sequence[Listing] | None = None) -> None:
        """Start a new review session; the saved queue is kept."""
        if listings is not None:
            self._deck = list(listings)
        self._cursor = 0
        self._passed.clear()
        self._recovery.clear()

    def sync(self, listings: Sequence[Listing], query: str) -> bool:
        """Take a freshly filtered deck.

        Resets when the query or the deck size changed. Returns True on reset.
        """
        changed = query != self._query or len(listings) != len(self._deck)
        self._deck = list(listings)
        self._query = query
        if changed:
            self.reset()
            logger.debug("Deck reset: %d listings, query=%r", len(self._deck), query)
        return changed

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def skip(self) -> Listing | None:
        """Swipe left. Returns the listing sent to the passed bin, if any."""
        state = self.state
        if isinstance(state, Exhausted):
            return None
        if isinstance(state, Recovering):
            item = self._recovery.pop(0)
        else:
            item = state.item
            self._cursor += 1
        self._pass(item)
        logger.debug("Skipped %s (passed=%d)", item.id, len(self._passed))
        return item

    def save(self) -> Listing | None:
        """Swipe right. Returns the listing added to the saved queue, if any."""
        state = self.state
        if isinstance(state, Exhausted):
            return None
        if isinstance(state, Recovering):
            item = self._recovery.pop(0)
        else:
            item = state.item
            self._cursor += 1
        self._save(item)
        logger.debug("Saved %s (saved=%d)", item.id, len(self.saved))
        return item

    def release(self, offset_px: float, threshold: float = SWIPE_THRESHOLD_PX) -> Listing | None:
        """Commit a drag release; below the threshold nothing changes."""
        action = resolve_swipe(offset_px, threshold)
        if action == "save":
            return self.save()
        if action == "skip":
            return self.skip()
        return None

    def undo(self) -> Listing | None:
        """Step the cursor back and drop the last passed listing."""
        if not self.can_undo:
            return None
        self._cursor = max(0, self._cursor - 1)
        item = self._passed.pop()
        logger.debug("Undid pass of %s (cursor=%d)", item.id, self._cursor)
        return item

    def recover(self, listing_id: str) -> Listing | None:
        """Move one listing from the passed bin to the back of the recovery queue."""
        for i, item in enumerate(self._passed):
            if item.id == listing_id:
                del self._passed[i]
                self._recovery.append(item)
                logger.debug("Recovered %s (recovery=%d)", listing_id, len(self._recovery))
                return item
        return None

    def recover_all(self) -> list[Listing]:
        """Move the whole passed bin, in order, to the recovery queue."""
        moved = list(self._passed)
        self._recovery.extend(moved)
        self._passed.clear()
        if moved:
            logger.debug("Recovered %d listings", len(moved))
        return moved

    def clear_bin(self) -> int:
        """Empty the passed bin without recovering anything."""
        count = len(self._passed)
        self._passed.clear()
        return count

    def toggle_bookmark(self, item: Listing) -> bool:
        """Desktop bookmark: flip saved membership without moving the cursor.

        Returns True if the listing is now saved.
        """
        if self.saved.toggle(item):
            self._remove_passed(item.id)
            return True
        return False

    def _pass(self, item: Listing) -> None:
        self.saved.remove(item.id)
        self._passed.append(item)

    def _save(self, item: Listing) -> None:
        self._remove_passed(item.id)
        self.saved.add(item)

    def _remove_passed(self, listing_id: str) -> None:
        self._passed = [p for p in self._passed if p.id != listing_id]
