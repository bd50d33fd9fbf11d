"""Thin wrapper around the gcloud CLI."""

import shutil
import subprocess
from typing import Optional

from rich.console import Console
from rich.markup import escape

from pdum.rolegen.types import DependencyError, GCloudError

GCLOUD = "gcloud"

console = Console()

_verbose = False


def set_verbose(verbose: bool) -> None:
    """Echo every gcloud command before running it when ``verbose`` is set."""
    global _verbose
    _verbose = verbose


def require_gcloud() -> str:
    """Return the path to the gcloud binary.

    Raises:
        DependencyError: If gcloud is not on PATH
    """
    path = shutil.which(GCLOUD)
    if path is None:
        raise DependencyError(
            "gcloud not found. Install the Google Cloud SDK "
            "(https://cloud.google.com/sdk/docs/install) or use --backend api"
        )
    return path


def run_gcloud(args: list[str], configuration: Optional[str] = None) -> str:
    """Run a gcloud command and return its stripped stdout.

    Args:
        args: List of arguments to pass to gcloud
        configuration: Named gcloud configuration to run under

    Returns:
        Command stdout

    Raises:
        DependencyError: If gcloud cannot be executed
        GCloudError: If the command exits non-zero
    """
    cmd = [GCLOUD] + args
    if configuration:
        cmd.append(f"--configuration={configuration}")
    if _verbose:
        console.print(f"[dim]$ {escape(' '.join(cmd))}[/dim]")
    try:
        result = subprocess.run(
            cmd,
            check=True,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise DependencyError(f"gcloud not found: {e}") from e
    except subprocess.CalledProcessError as e:
        raise GCloudError(f"Command failed: {' '.join(cmd)}\n{(e.stderr or '').strip()}") from e
    return result.stdout.strip()
