"""Output formatting utilities for consistent CLI reporting."""

import click

def section_header(text: str) -> str:
    """Format a section header with color.
    
    Args:
        text: Header text
        
    Returns:
        Formatted header string
    """
    return click.style(f"▶ {text}", fg='cyan', bold=True)

def success(text: str, prefix: str = "✓") -> str:
    """Format a success message.
    
    Args:
        text: Message text
        prefix: Prefix character (default: ✓)
        
    Returns:
        Formatted success string
    """
    return f"{click.style(prefix, fg='green')} {text}"

def error(text: str, prefix: str = "✗") -> str:
    """Format an error message.
    
    Args:
        text: Message text
        prefix: Prefix character (default: ✗)
        
    Returns:
        Formatted error string
    """
    return f"{click.style(prefix, fg='red')} {text}"

def warning(text: str, prefix: str = "⚠") -> str:
    """Format a warning message."""
    return f"{click.style(prefix, fg='yellow')} {text}"

def info(text: str) -> str:
    """Format an info (bullet) line."""
    return f"  {click.style('•', fg='blue')} {text}"

def link(url: str, label: str | None = None) -> str:
    """Format a clickable URL with optional label.
    
    Args:
        url: Web URL to show
        label: Optional label to show before the URL
        
    Returns:
        Formatted link string
    """
    styled = click.style(url, fg='cyan', underline=True)
    if label:
        return f"  {click.style('•', fg='blue')} {label}: {styled}"
    return f"  {styled}"


__all__ = [
    "section_header",
    "success",
    "error", 
    "warning",
    "info",
    "link",
]
