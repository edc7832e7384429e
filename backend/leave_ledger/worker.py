"""Worker process for the daily renewal job.

Runs an asyncio loop that credits yearly allowances to every employee whose
renewal anniversary has come round. Manual runs go through
``POST /renewals/trigger``; both paths are safe to overlap.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from leave_ledger.config import get_settings
from leave_ledger.db import get_session_factory

logger = logging.getLogger(__name__)


async def run_renewal_once(today: date | None = None) -> None:
    """Run one renewal pass in a fresh session. Failures are logged, not raised."""
    from leave_ledger.services.renewal import run_renewals

    if today is None:
        today = date.today()
    logger.info("Running renewals for %s", today)
    try:
        async with get_session_factory()() as session:
            result = await run_renewals(session, today)
        logger.info(
            "Renewal run complete for %s: scanned=%d renewed=%d skipped=%d errors=%d",
            today,
            result.scanned,
            result.renewed,
            result.skipped,
            result.errors,
        )
    except Exception:
        logger.exception("Renewal run failed for %s", today)


async def run_renewal_loop() -> None:
    """Main worker loop: one renewal pass per interval, starting immediately."""
    interval = get_settings().renewal_interval_seconds
    logger.info("Renewal worker started (interval=%ds)", interval)

    while True:
        await run_renewal_once()
        await asyncio.sleep(interval)


def main() -> None:
    """Entry point for the worker process."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    asyncio.run(run_renewal_loop())


if __name__ == "__main__":
    main()
