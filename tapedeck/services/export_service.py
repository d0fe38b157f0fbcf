"""Playlist export orchestration.

Drives one export end to end against a single MusicProvider:

    IDLE -> AUTHORIZING -> RESOLVING -> CREATING_PLAYLIST -> COMMITTING -> DONE
                 |             |                |                |
                 +-------------+----------------+----------------+--> FAILED

Rules:
  * Authorization is checked once, before anything else; a fresh credential
    is fetched right after it (no caching between exports).
  * Entries are resolved sequentially in input order, spaced by the pacer.
    "Not found" and non-fatal errors (``ExportError.fatal`` is False, i.e.
    transient search errors) put the entry on the unresolved list and the
    export goes on. A fatal error such as AuthError stops resolution at once;
    the failing entry and everything after it count as unresolved.
  * No playlist is created unless at least one entry resolved.
  * All resolved ids are committed with a single add_tracks call. If it
    fails the playlist still exists and its id is reported.
  * The orchestrator retries nothing (providers may retry a throttled search
    when ``rate_limit_retries`` is set). Calling export() again is a full
    fresh attempt and creates another playlist.

``export()`` never raises for pipeline errors: every failure ends up in
``ExportResult.fatal_error`` with a user-readable ``message``.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List
import logging
import time

from ..config import validate_provider_selection
from ..errors import (
    AuthDenied,
    CommitError,
    ExportError,
    ExportInProgress,
    NoMatches,
)
from ..providers import available_provider_instances, get_provider_instance
from ..providers.base import (
    AuthorizationState,
    Authorizer,
    Credential,
    CredentialProvider,
    MusicProvider,
    ProviderLinkGenerator,
    ResolvedTrack,
    TrackRequest,
)
from ..utils.logging_helpers import log_progress
from ..utils.pacing import FixedDelayPacer

logger = logging.getLogger(__name__)

# Unresolved entries listed by name in the summary message
MAX_LISTED_UNRESOLVED = 5


class ExportState(str, Enum):
    IDLE = "idle"
    AUTHORIZING = "authorizing"
    RESOLVING = "resolving"
    CREATING_PLAYLIST = "creating_playlist"
    COMMITTING = "committing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ExportResult:
    """Outcome of one export call.

    Invariants: ``added_count <= requested_count`` and
    ``added_count + len(unresolved) <= requested_count``.
    """
    requested_count: int
    playlist_name: str = ""
    provider: str = ""
    playlist_id: str | None = None
    added_count: int = 0
    unresolved: List[TrackRequest] = field(default_factory=list)
    fatal_error: ExportError | None = None
    state: ExportState = ExportState.IDLE
    transitions: List[ExportState] = field(default_factory=list)
    playlist_url: str | None = None
    message: str = ""
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.state is ExportState.DONE

    @property
    def orphaned_playlist(self) -> bool:
        """True when a playlist was created but the export failed afterwards."""
        return self.state is ExportState.FAILED and self.playlist_id is not None

    def raise_for_failure(self) -> None:
        """Re-raise the fatal error, if any."""
        if self.fatal_error is not None:
            raise self.fatal_error


def unresolved_listing(unresolved: List[TrackRequest], limit: int = MAX_LISTED_UNRESOLVED) -> str:
    """'Title by Artist' lines for the first ``limit`` entries plus a remainder line."""
    lines = [str(entry) for entry in unresolved[:limit]]
    if len(unresolved) > limit:
        lines.append(f"...and {len(unresolved) - limit} more")
    return "\n".join(lines)


def build_message(result: ExportResult) -> str:
    """User-readable summary of an export result."""
    if result.state is ExportState.DONE:
        if result.requested_count == 0:
            return "Nothing to export: the track list is empty."
        message = f"Added {result.added_count} of {result.requested_count} tracks to '{result.playlist_name}'."
        if result.unresolved:
            message += "\n\nThese tracks were not found:\n" + unresolved_listing(result.unresolved)
        return message
    error = result.fatal_error
    message = error.message if error is not None else "Export failed."
    if isinstance(error, CommitError) and result.playlist_id:
        message += f" The playlist '{result.playlist_name}' was created but is incomplete."
    return message


class ExportOrchestrator:
    """Export a list of (artist, title) entries as a playlist on one provider.

    One export at a time: a call made while another is running is rejected
    with ``ExportInProgress`` (busy flag owned by this instance). Apart from
    that flag nothing is kept between calls.
    """

    def __init__(
        self,
        provider: MusicProvider,
        credentials: CredentialProvider,
        authorizer: Authorizer,
        pacer: FixedDelayPacer | None = None,
        description: str = "",
        link_generator: ProviderLinkGenerator | None = None,
        progress_interval: int = 10,
        on_state_change: Callable[[ExportState], None] | None = None,
    ):
        self.provider = provider
        self.credentials = credentials
        self.authorizer = authorizer
        self.pacer = pacer if pacer is not None else FixedDelayPacer()
        self.description = description
        self.link_generator = link_generator
        self.progress_interval = progress_interval
        self.on_state_change = on_state_change
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def export(self, name: str, entries: Iterable[TrackRequest]) -> ExportResult:
        """Run one export and return its result. Never raises pipeline errors."""
        entries = list(entries)
        result = ExportResult(requested_count=len(entries), playlist_name=name, provider=self.provider.name)

        if self._busy:
            logger.warning(f"Export of '{name}' rejected: another export is still running")
            result.unresolved = list(entries)
            self._fail(result, ExportInProgress("Another export is already running. Please wait for it to finish."))
            result.message = build_message(result)
            return result

        self._busy = True
        start = time.time()
        try:
            self._run(name, entries, result)
        except ExportError as e:
            self._fail(result, e)
        except Exception as e:
            logger.debug("Unexpected export failure", exc_info=True)
            self._fail(result, ExportError(f"Export failed: {e}", details={"original_error": repr(e)}))
        finally:
            self._busy = False
            result.duration_seconds = time.time() - start

        if result.playlist_id and self.link_generator is not None:
            result.playlist_url = self.link_generator.playlist_url(result.playlist_id)
        result.message = build_message(result)
        logger.info(
            f"export playlist='{name}' provider={result.provider} state={result.state.value} "
            f"requested={result.requested_count} added={result.added_count} unresolved={len(result.unresolved)} "
            f"playlist_id={result.playlist_id}"
        )
        return result

    # ---------------- state machine -----------------

    def _transition(self, result: ExportResult, state: ExportState) -> None:
        logger.debug(f"export state {result.state.value} -> {state.value}")
        result.state = state
        result.transitions.append(state)
        if self.on_state_change is not None:
            self.on_state_change(state)

    def _fail(self, result: ExportResult, error: ExportError) -> None:
        result.fatal_error = error
        if isinstance(error, CommitError):
            # no partial credit: the provider's partial application is not introspected
            result.added_count = 0
        logger.error(f"Export failed ({type(error).__name__}): {error.message}")
        if error.details:
            logger.debug(f"Failure details: {error.details}")
        self._transition(result, ExportState.FAILED)

    def _run(self, name: str, entries: List[TrackRequest], result: ExportResult) -> None:
        if not entries:
            logger.info("Nothing to export: empty track list")
            self._transition(result, ExportState.DONE)
            return

        logger.info(f"Exporting {len(entries)} tracks to {self.provider.display_name} playlist '{name}'")
        self._transition(result, ExportState.AUTHORIZING)
        authorization = self.authorizer.request_authorization()
        if authorization is not AuthorizationState.AUTHORIZED:
            result.unresolved = list(entries)
            raise AuthDenied(
                f"{self.provider.display_name} access denied. Please allow access and try again.",
                details={"authorization": authorization.value},
            )
        try:
            credential = self.credentials.get_credential()
        except Exception:
            result.unresolved = list(entries)
            raise

        self._transition(result, ExportState.RESOLVING)
        hits = self._resolve_all(entries, credential, result)
        if not hits:
            raise NoMatches(
                f"Could not find any of these tracks in the {self.provider.display_name} catalog.",
                details={"requested": len(entries)},
            )

        self._transition(result, ExportState.CREATING_PLAYLIST)
        result.playlist_id = self.provider.create_playlist(name, credential, self.description)
        logger.debug(f"Created playlist {result.playlist_id}")

        self._transition(result, ExportState.COMMITTING)
        ids = [hit.catalog_id for hit in hits]
        try:
            added = self.provider.add_tracks(result.playlist_id, ids, credential)
        except CommitError as e:
            e.details.setdefault("playlist_id", result.playlist_id)
            raise
        result.added_count = max(0, min(int(added), len(ids)))
        self._transition(result, ExportState.DONE)

    def _resolve_all(self, entries: List[TrackRequest], credential: Credential, result: ExportResult) -> List[ResolvedTrack]:
        hits: List[ResolvedTrack] = []
        total = len(entries)
        start = time.time()
        self.pacer.reset()
        for idx, entry in enumerate(entries):
            self.pacer.wait()
            try:
                hit = self.provider.resolve(entry, credential)
            except ExportError as e:
                if e.fatal:
                    result.unresolved.extend(entries[idx:])
                    raise
                logger.warning(f"Skipping '{entry}': {e.message}")
                result.unresolved.append(entry)
            except Exception:
                # unexpected: this entry and the rest stay unprocessed
                result.unresolved.extend(entries[idx:])
                raise
            else:
                if hit is None:
                    logger.debug(f"Not found: '{entry}'")
                    result.unresolved.append(entry)
                else:
                    hits.append(hit)
            processed = idx + 1
            if self.progress_interval and (processed % self.progress_interval == 0 or processed == total):
                log_progress(
                    processed,
                    total,
                    resolved=len(hits),
                    unresolved=len(result.unresolved),
                    elapsed_seconds=time.time() - start,
                )
        return hits


def build_orchestrator(
    cfg: Dict[str, Any],
    provider_name: str | None = None,
    on_state_change: Callable[[ExportState], None] | None = None,
) -> ExportOrchestrator:
    """Wire an orchestrator for the configured (or given) provider.

    The provider is selected once here; the orchestrator itself never
    branches on provider type.

    Raises:
        ValueError: Unknown provider or invalid provider configuration
    """
    name = provider_name or validate_provider_selection(cfg)
    try:
        provider = get_provider_instance(name)
    except KeyError:
        raise ValueError(f"Unknown provider '{name}'. Available: {', '.join(available_provider_instances())}") from None
    provider_cfg = cfg.get('providers', {}).get(name) or {}
    provider.validate_config(provider_cfg)
    export_cfg = cfg.get('export', {})
    return ExportOrchestrator(
        provider=provider.create_music_provider(provider_cfg),
        credentials=provider.create_credential_provider(provider_cfg, cfg.get('backend', {})),
        authorizer=provider.create_authorizer(provider_cfg),
        pacer=FixedDelayPacer(float(export_cfg.get('pacing_seconds', 0.2))),
        description=export_cfg.get('description', ''),
        link_generator=provider.get_link_generator(),
        progress_interval=int(export_cfg.get('progress_interval', 10)),
        on_state_change=on_state_change,
    )


__all__ = [
    "ExportState",
    "ExportResult",
    "ExportOrchestrator",
    "build_orchestrator",
    "build_message",
    "unresolved_listing",
    "MAX_LISTED_UNRESOLVED",
]
