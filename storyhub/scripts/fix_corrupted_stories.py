"""
Story repair run, printing what it finds and does.

Back up the database before running this against production data.
"""

from typing import Callable

from storyhub.services.repair_service import RepairSummary, StoryRepairService


async def run_repair(service: StoryRepairService, echo: Callable[[str], None], dry_run: bool = False) -> RepairSummary:
    echo("=== Story Repair Tool ===")
    echo("WARNING: Backup your database before running this script!")
    echo("")

    corrupted = await service.scan()
    if not corrupted:
        echo("No corrupted stories found. Database is clean.")
        return RepairSummary()

    echo("Corrupted stories found:")
    for story in corrupted:
        echo(f"  - ID: {story['id']}, Title: {story.get('title') or 'Untitled'}")
    echo("")

    if dry_run:
        echo("Dry run: no changes made.")
        return RepairSummary(total=len(corrupted))

    echo("Starting repair process...")
    summary = await service.repair_all(corrupted)

    echo("")
    echo("=== Repair Summary ===")
    echo(f"Successfully repaired: {summary.repaired}")
    echo(f"Marked for manual review: {summary.needs_manual_review}")
    echo(f"Failed to repair: {summary.failed}")
    echo(f"Total processed: {summary.total}")

    if summary.needs_manual_review:
        echo("")
        echo("Some stories could not be automatically repaired and have been marked for manual review.")
    return summary
