"""Sweep orchestration: fetch the inventory, judge each droplet, act, report."""

from __future__ import annotations
import datetime
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

from .models import (
    Droplet,
    SweepConfig,
    SweepResult,
    SweepSummary,
    RETAINED,
    DELETED,
    DELETE_FAILED,
    UNPARSEABLE,
)
from .droplets import (
    InstanceAPI,
    InstanceAPIError,
    SweepCancelled,
    fetch_all_droplets,
    evaluate_staleness,
    age_in_days,
)
from .reporting import Reporter
from .utils import Clock, SystemClock, get_logger, format_timestamp

logger = get_logger()


def process_droplet(
    droplet: Droplet,
    now: datetime.datetime,
    config: SweepConfig,
    api: InstanceAPI,
    cancel_event: threading.Event,
) -> SweepResult:
    """Evaluate one droplet and delete it when stale and deletion is enabled."""
    outcome, created = evaluate_staleness(now, droplet.created_at, config.threshold)

    if outcome == UNPARSEABLE:
        return SweepResult(
            droplet_id=droplet.id,
            name=droplet.name,
            outcome=UNPARSEABLE,
            detail=f"Could not parse created-timestamp {droplet.created_at!r}",
            created_at=str(droplet.created_at),
        )

    age_days = age_in_days(now, created)
    result = SweepResult(
        droplet_id=droplet.id,
        name=droplet.name,
        outcome=outcome,
        created_at=droplet.created_at,
        age_days=age_days,
    )

    if outcome == RETAINED:
        return result

    result.detail = (
        f"Created {format_timestamp(created)}, {age_days:.2f} days old "
        f"(threshold: {config.threshold}s)"
    )

    if not config.delete_stale:
        return result

    if cancel_event.is_set():
        result.delete_skipped = True
        result.detail += "; delete skipped, sweep cancelled"
        return result

    try:
        api.delete(droplet.id)
    except InstanceAPIError as e:
        result.outcome = DELETE_FAILED
        result.detail = str(e)
        return result

    result.outcome = DELETED
    return result


def run_sweep(
    config: SweepConfig,
    api: InstanceAPI,
    reporter: Reporter,
    clock: Clock | None = None,
    cancel_event: threading.Event | None = None,
) -> SweepSummary:
    """Run one complete sweep over every droplet in the account."""
    start_time = time.monotonic()
    clock = clock or SystemClock()
    cancel_event = cancel_event or threading.Event()

    # One "now" for the whole sweep
    now = clock.now()
    summary = SweepSummary(started_at=now, dry_run=config.dry_run)

    timer = None
    if config.max_duration:
        timer = threading.Timer(config.max_duration, cancel_event.set)
        timer.daemon = True
        timer.start()

    try:
        logger.info(
            f"Starting droplet sweep (DRY_RUN={config.dry_run})",
            extra={"threshold": config.threshold, "tag_name": config.tag_name},
        )

        try:
            droplets = fetch_all_droplets(api, cancel_event)
        except SweepCancelled as e:
            summary.cancelled = True
            summary.fetch_error = str(e)
            reporter.record_fetch_failure(summary.fetch_error)
            return summary
        except InstanceAPIError as e:
            summary.fetch_error = str(e)
            reporter.record_fetch_failure(summary.fetch_error)
            return summary

        summary.inventory_size = len(droplets)

        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            futures = [
                executor.submit(process_droplet, d, now, config, api, cancel_event)
                for d in droplets
            ]
            for future in as_completed(futures):
                result = future.result()
                summary.results.append(result)
                reporter.record(
                    result.droplet_id, result.name, result.outcome, result.detail
                )

        # Cancelled only if the event actually stopped a delete
        summary.cancelled = any(r.delete_skipped for r in summary.results)
        if summary.cancelled:
            logger.warning("Sweep cancelled, results are partial")

        reporter.summarize(summary.counts)
        return summary

    finally:
        if timer is not None:
            timer.cancel()
        summary.duration = time.monotonic() - start_time
        logger.info(f"Sweep finished in {summary.duration:.1f}s")
