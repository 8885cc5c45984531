"""Tests for the swipe triage queue: transitions, recovery priority, invariants."""

import random

import pytest

from hiredeck.core.schemas import Job
from hiredeck.pipeline.triage import (
    SWIPE_THRESHOLD_PX,
    Exhausted,
    Recovering,
    Reviewing,
    SavedQueue,
    TriageQueue,
    resolve_swipe,
)


def _deck(n: int = 3) -> list[Job]:
    return [Job(id=f"J{i}", title=f"Job {i}") for i in range(1, n + 1)]


def _ids(items: object) -> list[str]:
    return [item.id for item in items]  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# resolve_swipe
# ---------------------------------------------------------------------------


class TestResolveSwipe:
    def test_threshold_constant(self) -> None:
        assert SWIPE_THRESHOLD_PX == 110

    def test_right_past_threshold_saves(self) -> None:
        assert resolve_swipe(111) == "save"

    def test_left_past_threshold_skips(self) -> None:
        assert resolve_swipe(-111) == "skip"

    @pytest.mark.parametrize("offset", [0, 50, -50, 110, -110])
    def test_within_threshold_snaps_back(self, offset: float) -> None:
        assert resolve_swipe(offset) is None

    def test_custom_threshold(self) -> None:
        assert resolve_swipe(60, threshold=50) == "save"


# ---------------------------------------------------------------------------
# SavedQueue
# ---------------------------------------------------------------------------


class TestSavedQueue:
    def test_add_dedupes_by_id(self) -> None:
        q = SavedQueue()
        assert q.add(Job(id="J1")) is True
        assert q.add(Job(id="J1", title="other copy")) is False
        assert len(q) == 1

    def test_keeps_insertion_order(self) -> None:
        q = SavedQueue(_deck(3)[::-1])
        assert q.ids == ["J3", "J2", "J1"]

    def test_toggle(self) -> None:
        q = SavedQueue()
        job = Job(id="J1")
        assert q.toggle(job) is True
        assert "J1" in q
        assert q.toggle(job) is False
        assert "J1" not in q

    def test_remove(self) -> None:
        q = SavedQueue(_deck(2))
        assert q.remove("J1") is True
        assert q.remove("J1") is False
        assert q.ids == ["J2"]

    def test_remove_many(self) -> None:
        q = SavedQueue(_deck(3))
        removed = q.remove_many(["J1", "J3", "J9"])
        assert _ids(removed) == ["J1", "J3"]
        assert q.ids == ["J2"]

    def test_items_is_a_copy(self) -> None:
        q = SavedQueue(_deck(1))
        q.items.append(Job(id="J9"))
        assert len(q) == 1


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


class TestState:
    def test_fresh_deck_reviewing_first(self) -> None:
        q = TriageQueue(_deck())
        state = q.state
        assert isinstance(state, Reviewing)
        assert state.cursor == 0
        assert q.current is not None and q.current.id == "J1"

    def test_empty_deck_exhausted(self) -> None:
        q = TriageQueue([])
        assert isinstance(q.state, Exhausted)
        assert q.current is None

    def test_cursor_reaches_length(self) -> None:
        q = TriageQueue(_deck(2))
        q.skip()
        q.skip()
        assert q.cursor == 2
        assert isinstance(q.state, Exhausted)
        assert q.current is None

    def test_recovering_takes_priority(self) -> None:
        q = TriageQueue(_deck())
        q.skip()
        q.recover("J1")
        state = q.state
        assert isinstance(state, Recovering)
        assert state.item.id == "J1"
        assert state.depth == 1

    def test_recovering_even_when_deck_exhausted(self) -> None:
        q = TriageQueue(_deck(1))
        q.skip()
        assert isinstance(q.state, Exhausted)
        q.recover("J1")
        assert isinstance(q.state, Recovering)


# ---------------------------------------------------------------------------
# Skip / Save
# ---------------------------------------------------------------------------


class TestSkip:
    def test_skip_from_deck(self) -> None:
        q = TriageQueue(_deck())
        skipped = q.skip()
        assert skipped is not None and skipped.id == "J1"
        assert _ids(q.passed) == ["J1"]
        assert q.cursor == 1

    def test_skip_from_recovery_leaves_cursor(self) -> None:
        q = TriageQueue(_deck())
        q.skip()
        q.recover("J1")
        q.skip()
        assert q.cursor == 1
        assert _ids(q.passed) == ["J1"]
        assert q.recovery == ()

    def test_skip_exhausted_is_noop(self) -> None:
        q = TriageQueue([])
        assert q.skip() is None
        assert q.passed == ()
        assert q.cursor == 0

    def test_skip_removes_from_saved(self) -> None:
        deck = _deck()
        q = TriageQueue(deck)
        q.toggle_bookmark(deck[0])
        q.skip()
        assert "J1" not in q.saved
        assert _ids(q.passed) == ["J1"]


class TestSave:
    def test_save_from_deck(self) -> None:
        q = TriageQueue(_deck())
        saved = q.save()
        assert saved is not None and saved.id == "J1"
        assert q.saved.ids == ["J1"]
        assert q.cursor == 1

    def test_save_no_duplicates(self) -> None:
        deck = _deck()
        saved = SavedQueue([deck[0]])
        q = TriageQueue(deck, saved)
        q.save()
        assert saved.ids == ["J1"]
        assert q.cursor == 1

    def test_save_from_recovery_leaves_cursor(self) -> None:
        q = TriageQueue(_deck())
        q.skip()
        q.recover("J1")
        q.save()
        assert q.cursor == 1
        assert q.saved.ids == ["J1"]
        assert q.passed == ()
        assert q.recovery == ()

    def test_save_exhausted_is_noop(self) -> None:
        q = TriageQueue(_deck(1))
        q.save()
        assert q.save() is None
        assert q.saved.ids == ["J1"]
        assert q.cursor == 1


class TestRelease:
    def test_release_past_threshold_saves(self) -> None:
        q = TriageQueue(_deck())
        q.release(150)
        assert q.saved.ids == ["J1"]

    def test_release_left_skips(self) -> None:
        q = TriageQueue(_deck())
        q.release(-150)
        assert _ids(q.passed) == ["J1"]

    def test_release_short_drag_changes_nothing(self) -> None:
        q = TriageQueue(_deck())
        assert q.release(80) is None
        assert q.cursor == 0
        assert len(q.saved) == 0
        assert q.passed == ()


# ---------------------------------------------------------------------------
# Undo
# ---------------------------------------------------------------------------


class TestUndo:
    def test_skip_then_undo_restores(self) -> None:
        q = TriageQueue(_deck())
        q.save()
        cursor_before = q.cursor
        saved_before = q.saved.ids
        q.skip()
        undone = q.undo()
        assert undone is not None and undone.id == "J2"
        assert q.cursor == cursor_before
        assert q.passed == ()
        assert q.saved.ids == saved_before
        assert q.current is not None and q.current.id == "J2"

    def test_undo_without_passes_is_noop(self) -> None:
        q = TriageQueue(_deck())
        q.save()
        assert q.can_undo is False
        assert q.undo() is None
        assert q.cursor == 1

    def test_undo_disabled_while_recovering(self) -> None:
        q = TriageQueue(_deck())
        q.skip()
        q.skip()
        q.recover("J1")
        assert q.can_undo is False
        assert q.undo() is None
        assert q.cursor == 2
        assert _ids(q.passed) == ["J2"]

    def test_undo_from_exhausted(self) -> None:
        q = TriageQueue(_deck(1))
        q.skip()
        assert isinstance(q.state, Exhausted)
        q.undo()
        assert q.cursor == 0
        assert q.current is not None and q.current.id == "J1"

    def test_recovered_item_skipped_again_returns_via_recover(self) -> None:
        q = TriageQueue(_deck())
        q.skip()
        q.recover("J1")
        assert q.can_undo is False
        q.skip()
        assert _ids(q.passed) == ["J1"]
        assert q.recover("J1") is not None
        assert q.current is not None and q.current.id == "J1"

    def test_undo_after_recovered_item_skipped_again(self) -> None:
        # Undo steps the cursor back and pops the newest bin entry even when
        # that entry was a recovered item; the recovered item is then gone.
        q = TriageQueue(_deck())
        q.skip()
        q.skip()
        q.recover("J1")
        q.skip()
        assert q.cursor == 2
        assert _ids(q.passed) == ["J2", "J1"]
        assert q.can_undo is True

        q.undo()
        assert q.cursor == 1
        assert q.current is not None and q.current.id == "J2"
        assert _ids(q.passed) == ["J2"]
        assert all(item.id != "J1" for item in (*q.passed, *q.recovery, *q.deck[q.cursor:]))

        q.skip()
        assert _ids(q.passed) == ["J2", "J2"]


# ---------------------------------------------------------------------------
# Recycle bin
# ---------------------------------------------------------------------------


class TestRecover:
    def test_recover_unknown_id(self) -> None:
        q = TriageQueue(_deck())
        q.skip()
        assert q.recover("J9") is None
        assert _ids(q.passed) == ["J1"]

    def test_recover_all_in_order(self) -> None:
        q = TriageQueue(_deck(5))
        for _ in range(3):
            q.skip()
        moved = q.recover_all()
        assert _ids(moved) == ["J1", "J2", "J3"]
        assert q.passed == ()
        assert _ids(q.recovery) == ["J1", "J2", "J3"]

    def test_recover_all_empty_bin(self) -> None:
        q = TriageQueue(_deck())
        assert q.recover_all() == []
        assert isinstance(q.state, Reviewing)

    def test_recovered_reviewed_before_deck_resumes(self) -> None:
        q = TriageQueue(_deck(5))
        for _ in range(3):
            q.skip()
        q.recover("J3")
        q.recover("J1")
        seen: list[str] = []
        for _ in range(2):
            assert q.current is not None
            seen.append(q.current.id)
            q.save()
        assert seen == ["J3", "J1"]
        assert q.current is not None and q.current.id == "J4"

    def test_clear_bin(self) -> None:
        q = TriageQueue(_deck())
        q.skip()
        q.skip()
        assert q.clear_bin() == 2
        assert q.passed == ()
        assert q.recovery == ()
        assert q.cursor == 2

    def test_clear_bin_when_empty(self) -> None:
        assert TriageQueue(_deck()).clear_bin() == 0


# ---------------------------------------------------------------------------
# Bookmark toggle
# ---------------------------------------------------------------------------


class TestToggleBookmark:
    def test_toggle_does_not_move_cursor(self) -> None:
        deck = _deck()
        q = TriageQueue(deck)
        assert q.toggle_bookmark(deck[2]) is True
        assert q.cursor == 0
        assert q.saved.ids == ["J3"]
        assert q.toggle_bookmark(deck[2]) is False
        assert q.saved.ids == []

    def test_toggle_pulls_item_out_of_bin(self) -> None:
        deck = _deck()
        q = TriageQueue(deck)
        q.skip()
        q.toggle_bookmark(deck[0])
        assert q.passed == ()
        assert q.saved.ids == ["J1"]


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestSync:
    def test_query_change_resets(self) -> None:
        deck = _deck()
        saved = SavedQueue()
        q = TriageQueue(deck, saved)
        q.save()
        q.skip()
        q.recover("J2")
        assert q.sync(deck, "cook") is True
        assert q.cursor == 0
        assert q.passed == ()
        assert q.recovery == ()
        assert saved.ids == ["J1"]

    def test_length_change_resets(self) -> None:
        deck = _deck()
        q = TriageQueue(deck)
        q.skip()
        assert q.sync(deck[:2], "") is True
        assert q.cursor == 0
        assert q.passed == ()

    def test_same_query_and_length_keeps_position(self) -> None:
        deck = _deck()
        q = TriageQueue(deck)
        q.skip()
        replacement = [Job(id=f"K{i}") for i in range(3)]
        assert q.sync(replacement, "") is False
        assert q.cursor == 1
        assert _ids(q.passed) == ["J1"]
        assert q.current is not None and q.current.id == "K1"


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestScenario:
    def test_walkthrough(self) -> None:
        q = TriageQueue(_deck(3))

        q.skip()
        assert _ids(q.passed) == ["J1"]
        assert q.current is not None and q.current.id == "J2"

        q.save()
        assert q.saved.ids == ["J2"]
        assert q.current is not None and q.current.id == "J3"

        q.recover("J1")
        assert q.passed == ()
        assert _ids(q.recovery) == ["J1"]
        assert q.current is not None and q.current.id == "J1"

        q.skip()
        assert _ids(q.passed) == ["J1"]
        assert q.recovery == ()
        assert q.current is not None and q.current.id == "J3"


class TestInvariants:
    @pytest.mark.parametrize("seed", range(20))
    def test_saved_and_passed_never_overlap(self, seed: int) -> None:
        rng = random.Random(seed)
        deck = _deck(8)
        q = TriageQueue(deck)
        for _ in range(60):
            action = rng.choice(["skip", "save", "undo", "recover", "recover_all", "clear", "toggle"])
            if action == "skip":
                q.skip()
            elif action == "save":
                q.save()
            elif action == "undo":
                q.undo()
            elif action == "recover" and q.passed:
                q.recover(rng.choice(q.passed).id)
            elif action == "recover_all":
                q.recover_all()
            elif action == "clear":
                q.clear_bin()
            elif action == "toggle":
                q.toggle_bookmark(rng.choice(deck))

            assert not set(q.saved.ids) & {p.id for p in q.passed}
            assert 0 <= q.cursor <= len(q.deck)
            assert len(q.saved.ids) == len(set(q.saved.ids))
