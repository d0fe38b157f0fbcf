"""Module entry point for `python -m tapedeck.cli`.

Ensures the Click command group runs when the package is executed as a module.
"""
import sys

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        # status symbols (✓ ✗ ▶) need UTF-8 on legacy Windows consoles
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")

    from tapedeck.cli import cli

    cli()
