from __future__ import annotations
import click

from ..config import load_typed_config
from ..version import __version__


def get_provider_config(cfg: dict, provider_name: str | None = None) -> dict:
    """Get provider configuration from config dict.

    Args:
        cfg: Full configuration dict
        provider_name: Provider name (defaults to cfg['provider'])

    Returns:
        Provider configuration dict
    """
    if provider_name is None:
        provider_name = cfg.get('provider', 'apple_music')

    providers = cfg.get('providers', {})
    return providers.get(provider_name, {})


@click.group()
@click.version_option(version=__version__, prog_name="tapedeck-export")
@click.pass_context
def cli(ctx: click.Context):
    """Export TapeDeck playlists to Apple Music or YouTube.

    \b
    TYPICAL WORKFLOWS:

    \b
    Apple Music:
      export TAPEDECK__PROVIDERS__APPLE_MUSIC__USER_TOKEN=...
      tapedeck dev-token                        # Check the backend issues a token
      tapedeck export "Radio 1987" --tracks tracks.json

    \b
    YouTube:
      export TAPEDECK__PROVIDERS__YOUTUBE__ACCESS_TOKEN=...
      tapedeck export "Radio 1987" --tracks tracks.csv --provider youtube

    \b
    Inspection:
      tapedeck providers                        # Registered providers
      tapedeck config --redact                  # Effective configuration

    \b
    Note: tracks are resolved one at a time with a short pause between
    searches; large lists take a while.
    """
    if isinstance(ctx.obj, dict):
        return
    ctx.obj = load_typed_config().to_dict()


__all__ = ["cli", "get_provider_config"]
