"""Sweep reporting: structured log records and SNS summary notifications."""

from __future__ import annotations
import datetime
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .models import SweepSummary, RETAINED, DELETE_FAILED, UNPARSEABLE
from .utils import get_logger, format_timestamp

logger = get_logger()

# SNS subject limit
MAX_SUBJECT_LENGTH = 100


class Reporter(Protocol):
    """Sink for per-droplet decisions and the sweep summary."""

    def record(self, droplet_id: int, name: str, outcome: str, detail: str) -> None: ...

    def record_fetch_failure(self, detail: str) -> None: ...

    def summarize(self, counts: dict[str, int]) -> None: ...


class LoggingReporter:
    """Reporter that writes every decision to the structured log."""

    def __init__(self, dry_run: bool = True):
        self.dry_run = dry_run

    def record(self, droplet_id: int, name: str, outcome: str, detail: str) -> None:
        extra = {
            "droplet_id": droplet_id,
            "droplet_name": name,
            "outcome": outcome,
            "detail": detail,
            "dry_run": self.dry_run,
        }
        if outcome in (DELETE_FAILED, UNPARSEABLE):
            logger.warning(f"Droplet {droplet_id} {outcome}", extra=extra)
        elif outcome == RETAINED:
            logger.debug(f"Droplet {droplet_id} {outcome}", extra=extra)
        else:
            logger.info(f"Droplet {droplet_id} {outcome}", extra=extra)

    def record_fetch_failure(self, detail: str) -> None:
        logger.error(
            "Failed to retrieve droplet list, skipping sweep",
            extra={"detail": detail},
        )

    def summarize(self, counts: dict[str, int]) -> None:
        total = sum(counts.values())
        logger.info(
            f"Sweep complete: {total} droplets evaluated",
            extra={"by_outcome": counts, "dry_run": self.dry_run},
        )
        for outcome, count in counts.items():
            if count:
                logger.info(f"  {outcome}: {count}")


def format_report(summary: SweepSummary) -> tuple[str, str]:
    """Render the summary as an SNS (subject, message) pair."""
    mode = "DRY-RUN" if summary.dry_run else "LIVE"
    actionable = [r for r in summary.results if r.outcome != RETAINED]

    message_lines = [
        "DigitalOcean Droplet Cleanup Report",
        f"Mode: {mode}",
        f"Timestamp: {format_timestamp(summary.started_at)}",
        "",
        f"Droplets Listed: {summary.inventory_size}",
    ]
    if summary.fetch_error:
        message_lines.append(f"Fetch Failed: {summary.fetch_error}")
    if summary.cancelled:
        message_lines.append("Sweep Cancelled: results are partial")
    for outcome, count in summary.counts.items():
        message_lines.append(f"  {outcome}: {count}")
    message_lines.append("")

    for result in actionable:
        message_lines.append(f"Droplet: {result.droplet_id}")
        message_lines.append(f"  Name: {result.name}")
        message_lines.append(f"  Outcome: {result.outcome}")
        if result.age_days is not None:
            message_lines.append(f"  Age: {result.age_days:.2f} days")
        if result.detail:
            message_lines.append(f"  Detail: {result.detail}")
        message_lines.append("")

    if summary.fetch_error:
        subject = f"[{mode}] Droplet Cleanup: listing failed"
    else:
        subject = f"[{mode}] Droplet Cleanup: {len(actionable)} stale droplets"

    return subject[:MAX_SUBJECT_LENGTH], "\n".join(message_lines)


def send_notification(summary: SweepSummary, topic_arn: str) -> bool:
    """Publish the sweep report to SNS. Returns True when a message was sent."""
    if not topic_arn:
        return False

    has_actions = any(r.outcome != RETAINED for r in summary.results)
    if not has_actions and summary.ok:
        return False

    subject, message = format_report(summary)

    try:
        sns = boto3.client("sns")
        sns.publish(TopicArn=topic_arn, Subject=subject, Message=message)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Failed to send SNS notification: {e}")
        return False

    logger.info(
        "Sent SNS notification",
        extra={
            "topic_arn": topic_arn,
            "sent_at": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        },
    )
    return True
