"""Browse session: filter selection + search query feeding a triage queue.

Seekers browse jobs, employers browse candidates. Every change to the
filters or the query re-runs the filter chain over the full listing
collection and hands the result to the queue, which resets itself when
the query or the deck size changed.
"""

import logging
from collections.abc import Sequence

from hiredeck.core.schemas import Candidate, FilterSelection, Job, Listing, Role, UnlockRequest
from hiredeck.pipeline.checkout import build_unlock_request
from hiredeck.pipeline.matcher import filter_candidates, filter_jobs
from hiredeck.pipeline.triage import SavedQueue, TriageQueue

logger = logging.getLogger(__name__)


class BrowseSession:
    """State of one browse screen for a role."""

    def __init__(
        self,
        role: Role,
        listings: Sequence[Listing],
        saved: SavedQueue | None = None,
    ) -> None:
        if role not in ("seeker", "employer"):
            msg = f"role must be 'seeker' or 'employer', got '{role}'"
            raise ValueError(msg)
        self.role: Role = role
        self._listings = list(listings)
        self.selection = FilterSelection()
        self._query = ""
        self._filtered = self._apply()
        self.queue = TriageQueue(self._filtered, saved)

    @property
    def listings(self) -> list[Listing]:
        return list(self._listings)

    @property
    def filtered(self) -> list[Listing]:
        return list(self._filtered)

    @property
    def query(self) -> str:
        return self._query

    @property
    def saved(self) -> SavedQueue:
        return self.queue.saved

    def toggle_filter(self, category: str, value: str) -> bool:
        """Flip a filter chip. Returns True if it is now active."""
        active = self.selection.toggle(category, value)
        self.refresh()
        return active

    def clear_filters(self) -> None:
        self.selection.clear()
        self.refresh()

    def set_query(self, query: str) -> None:
        self._query = query
        self.refresh()

    def refresh(self) -> bool:
        """Re-filter and sync the queue. Returns True if the queue was reset."""
        self._filtered = self._apply()
        logger.debug(
            "%s browse: %d of %d listings match", self.role, len(self._filtered), len(self._listings),
        )
        return self.queue.sync(self._filtered, self._query)

    def select(self, listing_id: str) -> Listing | None:
        """Look up a listing for the detail panel."""
        for listing in self._listings:
            if listing.id == listing_id:
                return listing
        return None

    def checkout_request(self) -> UnlockRequest:
        return build_unlock_request(self.role, self.saved)

    def _apply(self) -> list[Listing]:
        if self.role == "seeker":
            jobs = [item for item in self._listings if isinstance(item, Job)]
            return list(filter_jobs(jobs, self.selection, self._query))
        candidates = [item for item in self._listings if isinstance(item, Candidate)]
        return list(filter_candidates(candidates, self.selection, self._query))
