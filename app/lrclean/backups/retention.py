"""Retention policy engine.

Decides which backups may be discarded. The rule has two stages that
must stay separate:

1. The ``keep_count`` newest backups are always retained, whatever
   their age.
2. Of the remaining backups, only those dated strictly before
   ``today - minimum_age_months`` (calendar months) are selected.

Backups beyond ``keep_count`` that are still younger than the cutoff
are retained until they age past it on a later run.
"""

import calendar
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from lrclean.backups.models import BackupRecord, RetentionPolicy


@dataclass(frozen=True, slots=True)
class RetentionPlan:
    """Outcome of applying a policy to an inventory.

    Attributes:
        to_delete: Records selected for deletion, in inventory order.
        to_keep: Records retained, in inventory order.
        cutoff: Backups dated before this day are old enough to delete.
    """

    to_delete: tuple[BackupRecord, ...]
    to_keep: tuple[BackupRecord, ...]
    cutoff: date

    @property
    def freed_bytes(self) -> int:
        """Bytes that deleting the selection would free."""
        return sum(r.total_size_bytes for r in self.to_delete)


def subtract_months(day: date, months: int) -> date:
    """Move a date back by whole calendar months.

    The day of month is clamped to the length of the target month,
    so 2024-03-31 minus one month is 2024-02-29.

    Args:
        day: Starting date.
        months: Number of months to go back (may be 0).

    Returns:
        The shifted date.
    """
    index = day.year * 12 + (day.month - 1) - months
    year, month0 = divmod(index, 12)
    month = month0 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def retention_cutoff(policy: RetentionPolicy, today: date | None = None) -> date:
    """Return the date before which backups are old enough to delete."""
    return subtract_months(today or date.today(), policy.minimum_age_months)


def select_for_deletion(
    inventory: Sequence[BackupRecord],
    policy: RetentionPolicy,
    today: date | None = None,
) -> list[BackupRecord]:
    """Select the backups a policy allows to delete.

    Pure function: neither the inventory nor the records are modified.

    Args:
        inventory: Backups ordered newest first.
        policy: Retention parameters.
        today: Reference date. Defaults to the current local date.

    Returns:
        Records to delete, in inventory order.
    """
    cutoff = retention_cutoff(policy, today)
    return [r for r in inventory[policy.keep_count :] if r.timestamp.date() < cutoff]


def plan_retention(
    inventory: Sequence[BackupRecord],
    policy: RetentionPolicy,
    today: date | None = None,
) -> RetentionPlan:
    """Split an inventory into backups to delete and backups to keep.

    Args:
        inventory: Backups ordered newest first.
        policy: Retention parameters.
        today: Reference date. Defaults to the current local date.

    Returns:
        RetentionPlan for the inventory.
    """
    selected = select_for_deletion(inventory, policy, today)
    selected_paths = {r.folder_path for r in selected}
    return RetentionPlan(
        to_delete=tuple(selected),
        to_keep=tuple(r for r in inventory if r.folder_path not in selected_paths),
        cutoff=retention_cutoff(policy, today),
    )


def mark_for_deletion(inventory: Sequence[BackupRecord], plan: RetentionPlan) -> None:
    """Set ``marked_for_deletion`` on every record from a plan."""
    selected_paths = {r.folder_path for r in plan.to_delete}
    for record in inventory:
        record.marked_for_deletion = record.folder_path in selected_paths


def apply_policy(
    inventory: Sequence[BackupRecord],
    policy: RetentionPolicy,
    today: date | None = None,
) -> list[BackupRecord]:
    """Recompute ``marked_for_deletion`` on every record of an inventory.

    Safe to call repeatedly, e.g. each time the user adjusts the policy;
    the filesystem is not touched.

    Args:
        inventory: Backups ordered newest first.
        policy: Retention parameters.
        today: Reference date. Defaults to the current local date.

    Returns:
        The records now marked for deletion.
    """
    plan = plan_retention(inventory, policy, today)
    mark_for_deletion(inventory, plan)
    return list(plan.to_delete)
