"""
Terminal output for upload results.
"""

import json

import click
import httpx
from rich.console import Console
from rich.markup import escape

from flamedeck_upload.errors import ApiError, ApiErrorUnparseable, UploadError
from flamedeck_upload.options import UploadResult

err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)

RULE = "---------------------"


def describe_status(status: int) -> str:
    """'422 Unprocessable Entity', or just the code when the reason is unknown."""
    reason = httpx.codes.get_reason_phrase(status)
    return f"{status} {reason}" if reason else str(status)


def report_success(result: UploadResult) -> None:
    click.echo("Upload successful!")
    click.echo(f"View trace at: {result.view_url}")


def report_failure(error: UploadError) -> None:
    err_console.print("\n[bold red]--- Upload Failed ---[/]")
    if isinstance(error, ApiError):
        err_console.print(f"Error ({describe_status(error.status)}): {escape(error.message)}")
        if error.issues is not None:
            details = json.dumps(error.issues, indent=2)
            err_console.print(f"Details: {escape(details)}")
    elif isinstance(error, ApiErrorUnparseable):
        err_console.print(f"API Error ({describe_status(error.status)}) with unparseable response body:")
        click.echo(error.body, err=True)
    else:
        err_console.print(f"Error: {escape(error.message)}")
    err_console.print(f"[bold red]{RULE}[/]")
