"""Provider inspection commands."""

from __future__ import annotations
import click
import logging

from .helpers import cli, get_provider_config
from ..errors import AuthBackendError
from ..providers import available_provider_instances, get_provider_instance
from ..utils.output import info, section_header

logger = logging.getLogger(__name__)


@cli.command(name="providers")
@click.pass_context
def providers(ctx: click.Context):
    """List registered providers and their capabilities."""
    cfg = ctx.obj
    selected = cfg.get('provider')
    for name in available_provider_instances():
        provider = get_provider_instance(name)
        music = provider.create_music_provider(get_provider_config(cfg, name))
        caps = music.capabilities
        marker = click.style('*', fg='green') if name == selected else ' '
        batch = 'batch add' if caps.batch_add else 'per-item add'
        click.echo(f"{marker} {name:<12} {music.display_name:<12} search={'yes' if caps.search else 'no'} "
                   f"create={'yes' if caps.create_playlist else 'no'} {batch}")


@cli.command(name="dev-token")
@click.option("--provider", default=None, help="Provider whose credential source to test (default: configured provider).")
@click.pass_context
def dev_token(ctx: click.Context, provider: str | None):
    """Fetch a fresh service credential and show its storefront.

    The token itself is never printed, only its length.
    """
    cfg = ctx.obj
    name = provider or cfg.get('provider', 'apple_music')
    try:
        instance = get_provider_instance(name)
    except KeyError:
        raise click.UsageError(f"Unknown provider '{name}'. Available: {', '.join(available_provider_instances())}")
    try:
        credentials = instance.create_credential_provider(get_provider_config(cfg, name), cfg.get('backend', {}))
    except ValueError as e:
        raise click.UsageError(str(e))
    try:
        credential = credentials.get_credential()
    except AuthBackendError as e:
        logger.debug(f"Credential details: {e.details}")
        raise click.ClickException(e.message)
    click.echo(section_header(f"Credential issued for {name}"))
    click.echo(info(f"Storefront: {credential.storefront}"))
    click.echo(info(f"Token length: {len(credential.service_token)}"))


__all__ = ["providers", "dev_token"]
