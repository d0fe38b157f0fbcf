"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands. Keep this file minimal to avoid circular
imports and duplication.
"""
from tapedeck.cli.helpers import cli  # root group
from tapedeck.cli import export_cmds  # noqa: F401
from tapedeck.cli import provider_cmds  # noqa: F401
from tapedeck.cli import config_cmds  # noqa: F401

__all__ = ["cli"]
