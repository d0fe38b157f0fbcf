"""Playlist export command."""

from __future__ import annotations
import click
import logging
from pathlib import Path

from .helpers import cli
from ..providers.base import AuthorizationState, Authorizer
from ..services.export_service import build_orchestrator
from ..services.track_source import load_track_requests
from ..utils.logging_helpers import format_summary
from ..utils.output import error, link, section_header, success, warning

logger = logging.getLogger(__name__)


class ConfirmingAuthorizer(Authorizer):
    """Ask the user for consent on top of the provider's own authorization.

    The prompt is only shown when the wrapped authorizer grants access;
    a provider-level denial is returned without asking. An aborted prompt
    (Ctrl-C, closed stdin) counts as a denial.
    """

    def __init__(self, inner: Authorizer, prompt: str):
        self.inner = inner
        self.prompt = prompt

    def request_authorization(self) -> AuthorizationState:
        state = self.inner.request_authorization()
        if state is not AuthorizationState.AUTHORIZED:
            return state
        try:
            confirmed = click.confirm(self.prompt, default=True)
        except click.Abort:
            logger.debug("Confirmation prompt aborted; treating authorization as denied")
            return AuthorizationState.DENIED
        return AuthorizationState.AUTHORIZED if confirmed else AuthorizationState.DENIED


@cli.command(name="export")
@click.argument("name")
@click.option("--tracks", "tracks_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), required=True,
              help="Track list: generation JSON, JSON list, or CSV with artist,title columns.")
@click.option("--provider", default=None, help="Destination provider (overrides config; e.g. apple_music, youtube).")
@click.option("--description", default=None, help="Playlist description (overrides config).")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation before writing to the provider.")
@click.pass_context
def export(ctx: click.Context, name: str, tracks_file: Path, provider: str | None, description: str | None, yes: bool):
    """Resolve a track list and create playlist NAME on the provider.

    Tracks that cannot be found are skipped and listed at the end. Running
    the command twice creates two playlists.
    """
    cfg = ctx.obj
    try:
        entries = load_track_requests(tracks_file)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--tracks")

    try:
        orchestrator = build_orchestrator(cfg, provider_name=provider)
    except ValueError as e:
        raise click.UsageError(str(e))
    if description is not None:
        orchestrator.description = description
    display = orchestrator.provider.display_name
    if not yes:
        orchestrator.authorizer = ConfirmingAuthorizer(
            orchestrator.authorizer,
            f"Create playlist '{name}' with up to {len(entries)} tracks in your {display} account?",
        )

    click.echo(section_header(f"Exporting {len(entries)} tracks to {display}"))
    result = orchestrator.export(name, entries)

    if result.ok:
        click.echo(success(result.message))
        if result.playlist_url:
            click.echo(link(result.playlist_url, label="Playlist"))
        click.echo(format_summary(result.added_count, result.requested_count, len(result.unresolved),
                                  duration_seconds=result.duration_seconds))
        return

    click.echo(error(result.message), err=True)
    if result.orphaned_playlist:
        click.echo(warning(f"Incomplete playlist left on {display}: {result.playlist_id}"), err=True)
        if result.playlist_url:
            click.echo(link(result.playlist_url, label="Playlist"), err=True)
    ctx.exit(1)


__all__ = ["export", "ConfirmingAuthorizer"]
