"""Load export entries from files.

Accepted inputs:
  * JSON produced by the playlist generation endpoint:
    ``{"tracks": [{"timestamp": ..., "artist": ..., "title": ..., "source_rank": ...}]}``
  * A bare JSON list of ``{"artist": ..., "title": ...}`` objects
  * CSV with an ``artist,title`` header (extra columns ignored)

Order is preserved; duplicates are kept (a simulated broadcast can repeat
a song and each play is exported).
"""

from __future__ import annotations
import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

from ..providers.base import TrackRequest

logger = logging.getLogger(__name__)


def _to_request(row: Any, position: int) -> TrackRequest:
    if not isinstance(row, dict):
        raise ValueError(f"Track #{position}: expected an object with artist and title")
    artist = str(row.get('artist') or '').strip()
    title = str(row.get('title') or '').strip()
    if not artist or not title:
        raise ValueError(f"Track #{position}: missing artist or title")
    return TrackRequest(artist=artist, title=title)


def parse_track_rows(rows: Iterable[Any]) -> List[TrackRequest]:
    """Convert dict rows into TrackRequests (1-based positions in errors)."""
    return [_to_request(row, idx) for idx, row in enumerate(rows, 1)]


def load_track_requests(path: Path | str) -> List[TrackRequest]:
    """Read export entries from a JSON or CSV file.

    Args:
        path: File to read; ``.csv`` is parsed as CSV, anything else as JSON

    Returns:
        TrackRequests in file order

    Raises:
        ValueError: Unreadable structure or a row without artist/title
    """
    path = Path(path)
    if path.suffix.lower() == '.csv':
        with path.open(newline='', encoding='utf-8-sig') as fh:
            reader = csv.DictReader(fh)
            fieldnames = [f.strip().lower() for f in (reader.fieldnames or [])]
            if 'artist' not in fieldnames or 'title' not in fieldnames:
                raise ValueError(f"{path.name}: CSV header must contain 'artist' and 'title'")
            rows = [{(k or '').strip().lower(): v for k, v in row.items()} for row in reader]
        requests_ = parse_track_rows(rows)
    else:
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise ValueError(f"{path.name}: invalid JSON ({e})") from e
        if isinstance(data, dict):
            if 'tracks' not in data:
                raise ValueError(f"{path.name}: expected a 'tracks' list")
            data = data['tracks']
        if not isinstance(data, list):
            raise ValueError(f"{path.name}: expected a list of tracks")
        requests_ = parse_track_rows(data)
    logger.debug(f"Loaded {len(requests_)} track(s) from {path}")
    return requests_


__all__ = ["load_track_requests", "parse_track_rows"]
