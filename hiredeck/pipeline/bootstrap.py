"""Startup step: load listings once, seeding an empty store first.

Data flow:
  1. Read jobs and candidates from the store
  2. If either is empty and seeding is enabled, write seed rows and re-read
  3. Hand the collections to the browse screens as plain arguments
"""

import logging
import sqlite3

from hiredeck.core.config import SeedConfig
from hiredeck.core.db import fetch_candidates, fetch_jobs, upsert_candidates, upsert_jobs
from hiredeck.core.schemas import Candidate, Job
from hiredeck.data.seed import generate_candidates, generate_jobs

logger = logging.getLogger(__name__)


class Marketplace:
    """Listings loaded at startup."""

    def __init__(self, jobs: list[Job], candidates: list[Candidate], seeded: bool = False) -> None:
        self.jobs = jobs
        self.candidates = candidates
        self.seeded = seeded


def seed_store(conn: sqlite3.Connection, config: SeedConfig) -> tuple[int, int]:
    """Write seed listings. Returns (jobs_written, candidates_written)."""
    jobs_written = upsert_jobs(conn, generate_jobs(config.job_count))
    candidates_written = upsert_candidates(conn, generate_candidates(config.candidate_count))
    logger.info("Seeded %d jobs and %d candidates", jobs_written, candidates_written)
    return jobs_written, candidates_written


def bootstrap_marketplace(conn: sqlite3.Connection, config: SeedConfig) -> Marketplace:
    """Load the marketplace, seeding the store if it is empty."""
    jobs = fetch_jobs(conn)
    candidates = fetch_candidates(conn)

    if jobs and candidates:
        logger.info("Loaded %d jobs and %d candidates", len(jobs), len(candidates))
        return Marketplace(jobs, candidates)

    if not config.enabled:
        logger.info(
            "Store incomplete (%d jobs, %d candidates) and seeding disabled",
            len(jobs), len(candidates),
        )
        return Marketplace(jobs, candidates)

    logger.info("No listings found, seeding store")
    seed_store(conn, config)
    jobs = fetch_jobs(conn)
    candidates = fetch_candidates(conn)
    logger.info("Loaded %d jobs and %d candidates after seeding", len(jobs), len(candidates))
    return Marketplace(jobs, candidates, seeded=True)
