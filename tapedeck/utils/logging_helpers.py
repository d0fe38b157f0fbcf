"""Logging helper utilities for consistent progress reporting."""

import logging
import click

logger = logging.getLogger(__name__)


def log_progress(
    processed: int,
    total: int | None,
    resolved: int = 0,
    unresolved: int = 0,
    elapsed_seconds: float = 0.0,
    item_name: str = "tracks"
) -> None:
    """Log resolution progress with consistent formatting.

    Args:
        processed: Number of entries processed so far
        total: Total number of entries (None if unknown)
        resolved: Count of entries matched in the catalog
        unresolved: Count of entries not found or skipped after an error
        elapsed_seconds: Time elapsed since start
        item_name: Name of items being processed (e.g., "tracks")
    """
    parts = [
        f"{click.style(f'{processed}', fg='cyan')} {item_name} processed"
    ]

    if total:
        pct = (processed / total * 100) if total > 0 else 0
        parts[0] = f"{click.style(f'{processed}/{total}', fg='cyan')} {item_name} ({pct:.0f}%)"

    if resolved > 0:
        parts.append(f"{click.style(f'{resolved} found', fg='green')}")
    if unresolved > 0:
        parts.append(f"{click.style(f'{unresolved} not found', fg='yellow')}")

    if elapsed_seconds > 0:
        rate = processed / elapsed_seconds
        parts.append(f"{rate:.1f} {item_name}/s")

    logger.info(" | ".join(parts))


def format_summary(
    added: int,
    requested: int,
    unresolved: int,
    duration_seconds: float = 0.0,
    item_name: str = "Export"
) -> str:
    """Format a one-line export summary with colored counts.

    Args:
        added: Tracks added to the playlist
        requested: Tracks requested
        unresolved: Tracks that could not be resolved
        duration_seconds: Total duration in seconds
        item_name: Label for the line

    Returns:
        Formatted summary string with colors
    """
    ok = added > 0 and added + unresolved == requested
    parts = [
        click.style('✓', fg='green') if ok else click.style('⚠', fg='yellow'),
        f"{item_name}:",
        click.style(f'{added}/{requested} added', fg='green'),
    ]

    if unresolved > 0:
        parts.append(click.style(f'{unresolved} not found', fg='yellow'))

    if duration_seconds > 0:
        parts.append(f"in {duration_seconds:.2f}s")

    return " ".join(parts)


__all__ = ["log_progress", "format_summary"]
