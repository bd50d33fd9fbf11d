"""CLI entry point for pdum_rolegen."""

import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from pdum.rolegen import pipeline
from pdum.rolegen.fetchers import ApiFetcher, GcloudFetcher, StaticFetcher
from pdum.rolegen.gcloud import set_verbose
from pdum.rolegen.types import DependencyError, RoleGenError

app = typer.Typer(
    help="Generate GCP IAM custom role definitions from YAML specs",
    no_args_is_help=True,
)
console = Console()


class Backend(str, Enum):
    """Where the permissions of predefined roles come from."""

    gcloud = "gcloud"
    api = "api"
    static = "static"


@app.command("version")
def version():
    """Show the version of pdum_rolegen."""
    from pdum.rolegen import __version__

    console.print(f"pdum_rolegen version: [bold green]{__version__}[/bold green]")


def make_fetcher(backend: Backend, roles_file: Optional[Path], config_name: Optional[str]):
    """Build the permission fetcher for ``backend``.

    Raises:
        DependencyError: If the backend's tool, credentials or data are missing
    """
    if backend is Backend.static:
        if roles_file is None:
            raise DependencyError("--roles-file is required with --backend static")
        return StaticFetcher.from_file(roles_file)
    if backend is Backend.api:
        return ApiFetcher()
    return GcloudFetcher(configuration=config_name)


@app.command("generate")
def generate(
    paths: Optional[List[Path]] = typer.Argument(
        None,
        help="Spec files or directories to process (default: the spec directory)",
        show_default=False,
    ),
    spec_dir: Path = typer.Option(
        Path("specs"),
        "--spec-dir",
        envvar="PDUM_ROLEGEN_SPEC_DIR",
        help="Directory searched when no paths are given",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        envvar="PDUM_ROLEGEN_OUTPUT_DIR",
        help="Directory the generated role files are written to",
    ),
    backend: Backend = typer.Option(
        Backend.gcloud,
        "--backend",
        "-b",
        envvar="PDUM_ROLEGEN_BACKEND",
        help="How predefined role permissions are looked up",
    ),
    roles_file: Optional[Path] = typer.Option(
        None,
        "--roles-file",
        envvar="PDUM_ROLEGEN_ROLES_FILE",
        help="YAML mapping of role name to permissions (static backend)",
    ),
    config_name: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="CLOUDSDK_ACTIVE_CONFIG_NAME",
        help="The gcloud configuration name to use (gcloud backend)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print every gcloud command",
    ),
):
    """
    Generate custom role YAML files from role specs.

    Each spec is written to OUTPUT_DIR/<name>.yaml, ready to diff against
    `gcloud iam roles describe --format=yaml` or to pass to
    `gcloud iam roles create --file`.

    Examples:
        # Every spec under ./specs
        pdum_rolegen generate

        # Just one spec
        pdum_rolegen generate specs/foo.bar.yaml

        # Without gcloud, using canned role data
        pdum_rolegen generate --backend static --roles-file roles.yaml
    """
    set_verbose(verbose)
    if not paths:
        paths = [spec_dir]

    try:
        fetcher = make_fetcher(backend, roles_file, config_name)
        status = pipeline.run(paths, fetcher, output_dir)
    except RoleGenError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Generation interrupted by user.[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    sys.exit(status)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
