"""CLI entry point for the marketplace browse and unlock flow."""

import argparse
import json
import logging
import sqlite3
import sys
from pathlib import Path

from hiredeck.core.config import Settings
from hiredeck.core.db import init_db
from hiredeck.core.formatters import format_candidate_title, format_fee
from hiredeck.core.schemas import FILTER_CATEGORIES, Candidate, Listing
from hiredeck.pipeline.bootstrap import bootstrap_marketplace, seed_store
from hiredeck.pipeline.browse import BrowseSession
from hiredeck.pipeline.checkout import UnlockLedger
from hiredeck.pipeline.detail import preview
from hiredeck.pipeline.posting import JobPosting, format_pay_range, post_job, prepend_listing

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "config/settings.yaml"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Video-first job marketplace - browse, triage and unlock listings",
    )
    subparsers = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- seed subcommand ---
    seed_parser = subparsers.add_parser("seed", parents=[common], help="Seed the listing store")
    seed_parser.add_argument(
        "--force",
        action="store_true",
        help="Write seed listings even if the store already has data",
    )

    # --- browse / checkout share the triage arguments ---
    triage = argparse.ArgumentParser(add_help=False)
    triage.add_argument(
        "--role",
        required=True,
        choices=["seeker", "employer"],
        help="seeker browses jobs, employer browses candidates",
    )
    triage.add_argument("--query", default="", help="Free-text search")
    triage.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="CATEGORY=VALUE",
        help=f"Activate a filter chip; categories: {', '.join(FILTER_CATEGORIES)}",
    )
    triage.add_argument(
        "--actions",
        default="",
        help=(
            "Comma-separated triage actions: skip, save, undo, recover:ID, "
            "recover-all, clear-bin, toggle:ID, swipe:OFFSET"
        ),
    )

    browse_parser = subparsers.add_parser(
        "browse", parents=[common, triage], help="Filter listings and replay triage actions",
    )
    browse_parser.add_argument(
        "--show",
        metavar="ID",
        help="Print the detail preview for a listing",
    )
    browse_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export the session state to format (json)",
    )

    subparsers.add_parser(
        "checkout", parents=[common, triage], help="Triage, then unlock the saved queue",
    )

    # --- post-job subcommand ---
    post_parser = subparsers.add_parser(
        "post-job", parents=[common], help="Publish a job listing from a YAML file",
    )
    post_parser.add_argument("--file", required=True, help="Path to the job posting YAML")
    post_parser.add_argument("--id", dest="listing_id", help="Listing id (default: generated)")
    post_parser.add_argument("--pay-min", type=int, help="Lower end of the pay band")
    post_parser.add_argument("--pay-max", type=int, help="Upper end of the pay band")
    post_parser.add_argument(
        "--pay-type",
        choices=["Hourly", "Salary"],
        default="Hourly",
        help="Pay band unit (default: Hourly)",
    )

    # --- unlocked subcommand ---
    unlocked_parser = subparsers.add_parser(
        "unlocked", parents=[common], help="List the listings a role has unlocked",
    )
    unlocked_parser.add_argument(
        "--role",
        required=True,
        choices=["seeker", "employer"],
        help="seeker lists unlocked jobs, employer lists unlocked candidates",
    )
    unlocked_parser.add_argument(
        "--export",
        choices=["json"],
        help="Print full unlocked previews as JSON",
    )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(2)
    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str) -> Settings:
    """Load settings, falling back to defaults when the default file is absent."""
    if path == DEFAULT_CONFIG and not Path(path).exists():
        logger.debug("No %s found - using built-in defaults", path)
        return Settings()
    return Settings.from_yaml(path)


def apply_filters(session: BrowseSession, raw_filters: list[str]) -> None:
    for raw in raw_filters:
        category, sep, value = raw.partition("=")
        if not sep or not value:
            msg = f"Filter must look like CATEGORY=VALUE, got '{raw}'"
            raise ValueError(msg)
        session.toggle_filter(category.strip(), value.strip())


def apply_actions(session: BrowseSession, actions: str, threshold: float) -> None:
    """Replay a comma-separated list of triage actions against the session."""
    queue = session.queue
    for raw in filter(None, (a.strip() for a in actions.split(","))):
        name, _, arg = raw.partition(":")
        if name == "skip":
            queue.skip()
        elif name == "save":
            queue.save()
        elif name == "undo":
            queue.undo()
        elif name == "recover":
            if queue.recover(arg) is None:
                logger.warning("'%s' is not in the passed bin", arg)
        elif name == "recover-all":
            queue.recover_all()
        elif name == "clear-bin":
            queue.clear_bin()
        elif name == "toggle":
            listing = session.select(arg)
            if listing is None:
                msg = f"Unknown listing id: {arg}"
                raise ValueError(msg)
            queue.toggle_bookmark(listing)
        elif name == "swipe":
            try:
                offset = float(arg)
            except ValueError:
                msg = f"swipe needs a numeric offset, got '{arg}'"
                raise ValueError(msg) from None
            queue.release(offset, threshold)
        else:
            msg = f"Unknown triage action: {name}"
            raise ValueError(msg)


def build_session(settings: Settings, conn: sqlite3.Connection, args: argparse.Namespace) -> BrowseSession:
    marketplace = bootstrap_marketplace(conn, settings.seed)
    listings: list[Listing] = list(marketplace.jobs if args.role == "seeker" else marketplace.candidates)
    session = BrowseSession(args.role, listings)
    apply_filters(session, args.filter)
    session.set_query(args.query)
    apply_actions(session, args.actions, settings.marketplace.swipe_threshold_px)
    return session


def _label(listing: Listing) -> str:
    if isinstance(listing, Candidate):
        return f"{listing.id}  {format_candidate_title(listing)} ({listing.location or '-'})"
    return f"{listing.id}  {listing.title or '-'} ({listing.location or '-'})"


def export_session_json(session: BrowseSession) -> str:
    """Export the session state as a JSON string."""
    queue = session.queue
    current = queue.current
    data = {
        "role": session.role,
        "query": session.query,
        "filters": {c: sorted(getattr(session.selection, c)) for c in FILTER_CATEGORIES},
        "filtered": [item.id for item in session.filtered],
        "state": queue.state.state,
        "cursor": queue.cursor,
        "current": current.id if current is not None else None,
        "saved": session.saved.ids,
        "passed": [item.id for item in queue.passed],
        "recovery": [item.id for item in queue.recovery],
    }
    return json.dumps(data, indent=2)


def print_session(session: BrowseSession, ledger: UnlockLedger) -> None:
    queue = session.queue
    print(f"{len(session.filtered)} of {len(session.listings)} listings match")
    current = queue.current
    if current is None:
        print("Current: (deck exhausted)")
    else:
        print(f"Current [{queue.state.state}]: {_label(current)}")
    print(f"Saved ({len(session.saved)}):")
    for item in session.saved:
        print(f"  {_label(item)}")
    print(f"Passed ({len(queue.passed)}):")
    for item in queue.passed:
        print(f"  {_label(item)}")
    if queue.recovery:
        print(f"Recovering ({len(queue.recovery)}): {', '.join(i.id for i in queue.recovery)}")
    request = session.checkout_request()
    chargeable = ledger.chargeable_ids(request)
    print(f"Unlock total: {len(chargeable)} x {format_fee(ledger.fee)} = {format_fee(ledger.quote(request))}")
    if len(chargeable) < request.count:
        print(f"Already unlocked: {request.count - len(chargeable)}")


def cmd_seed(settings: Settings, args: argparse.Namespace) -> None:
    conn = init_db(settings.database.path)
    try:
        if args.force:
            jobs, candidates = seed_store(conn, settings.seed)
            print(f"Seeded {jobs} jobs and {candidates} candidates.")
        else:
            marketplace = bootstrap_marketplace(conn, settings.seed)
            state = "seeded" if marketplace.seeded else "already populated"
            print(f"Store {state}: {len(marketplace.jobs)} jobs, {len(marketplace.candidates)} candidates.")
    finally:
        conn.close()


def cmd_browse(settings: Settings, args: argparse.Namespace) -> None:
    conn = init_db(settings.database.path)
    try:
        session = build_session(settings, conn, args)
        ledger = UnlockLedger(conn, settings.marketplace.interaction_fee)
        if args.export == "json":
            print(export_session_json(session))
        else:
            print_session(session, ledger)
        if args.show:
            listing = session.select(args.show)
            if listing is None:
                msg = f"Unknown listing id: {args.show}"
                raise ValueError(msg)
            print(json.dumps(preview(listing, ledger.is_unlocked(session.role, listing.id)), indent=2))
    finally:
        conn.close()


def cmd_checkout(settings: Settings, args: argparse.Namespace) -> None:
    conn = init_db(settings.database.path)
    try:
        session = build_session(settings, conn, args)
        ledger = UnlockLedger(conn, settings.marketplace.interaction_fee)
        request = session.checkout_request()
        print(f"Total unlocks: {len(ledger.chargeable_ids(request))} - {format_fee(ledger.quote(request))}")
        receipt = ledger.process(request, session.saved)
        print(f"Unlocked: {', '.join(receipt.unlocked_ids) or '(none)'}")
        if receipt.already_unlocked_ids:
            print(f"Already unlocked: {', '.join(receipt.already_unlocked_ids)}")
        print(f"Charged: {format_fee(receipt.total)}")
    finally:
        conn.close()


def cmd_post_job(settings: Settings, args: argparse.Namespace) -> None:
    posting = JobPosting.from_yaml(args.file)
    if args.pay_min is not None or args.pay_max is not None:
        if args.pay_min is None or args.pay_max is None:
            msg = "--pay-min and --pay-max must be given together"
            raise ValueError(msg)
        pay_range = format_pay_range(args.pay_min, args.pay_max, args.pay_type)
        posting = posting.model_copy(update={"pay_range": pay_range})

    conn = init_db(settings.database.path)
    try:
        marketplace = bootstrap_marketplace(conn, settings.seed)
        job = post_job(conn, posting, args.listing_id)
        jobs = prepend_listing(marketplace.jobs, job)
        print(f"Posted {_label(job)}")
        print(f"Jobs listed: {len(jobs)}")
    finally:
        conn.close()


def cmd_unlocked(settings: Settings, args: argparse.Namespace) -> None:
    conn = init_db(settings.database.path)
    try:
        ledger = UnlockLedger(conn, settings.marketplace.interaction_fee)
        listings = ledger.unlocked_listings(args.role)
        if args.export == "json":
            print(json.dumps([preview(item, True) for item in listings], indent=2))
            return
        kind = "jobs" if args.role == "seeker" else "candidates"
        print(f"Unlocked {kind} ({len(listings)}):")
        for item in listings:
            print(f"  {_label(item)}")
    finally:
        conn.close()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    commands = {
        "seed": cmd_seed,
        "browse": cmd_browse,
        "checkout": cmd_checkout,
        "post-job": cmd_post_job,
        "unlocked": cmd_unlocked,
    }
    try:
        commands[args.command](settings, args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
