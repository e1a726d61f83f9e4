"""Command-line interface for cpanel_uploader."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from cpanel_uploader import (
    ConfigurationError,
    CpanelError,
    OperationResult,
    RemoteFilesystemClient,
    Settings,
    load_settings,
)
from cpanel_uploader.demo import remove_demo_artifacts, run_demo, temporary_workspace

RULE = "=" * 60


def get_client(settings: Settings) -> RemoteFilesystemClient:
    """Create a client for the configured account."""
    return RemoteFilesystemClient(settings.credentials, timeout=settings.timeout)


def _resolve_settings(ctx: click.Context) -> Settings:
    """Load settings, exiting with status 1 when configuration is incomplete."""
    try:
        return load_settings(env_file=ctx.obj.get("env_file"))
    except ConfigurationError as e:
        click.echo(click.style(f"ERROR: {e}", fg="red"), err=True)
        click.echo("Please set USERNAME, SUBDOMAINNAME, and BLUEHOSTAPI", err=True)
        sys.exit(1)


def _report(result: OperationResult, success_message: str) -> None:
    """Print an operation result and exit non-zero on failure."""
    if result.success:
        click.echo(click.style("✓ ", fg="green") + success_message)
        return
    click.echo(click.style("✗ ", fg="red") + f"{result.operation} failed: {result.error}", err=True)
    details = result.describe_payload()
    if details:
        click.echo(details, err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="cpanel-uploader")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Load settings from this .env file (default: ./.env if present)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every step")
@click.pass_context
def main(ctx: click.Context, env_file: Path | None, verbose: bool) -> None:
    """cPanel file manager CLI - Upload and manage files on your hosting account."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file


@main.command()
@click.option(
    "--workspace",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory in which a temporary work folder is created and removed",
)
@click.option(
    "--remove-after",
    is_flag=True,
    help="Delete the uploaded files and directory once the run succeeds",
)
@click.pass_context
def demo(ctx: click.Context, workspace: Path | None, remove_after: bool) -> None:
    """Upload a timestamped file, create a directory and upload into it.

    Examples:

        cpanel-upload demo

        cpanel-upload --env-file prod.env demo --remove-after
    """
    settings = _resolve_settings(ctx)

    click.echo(RULE)
    click.echo("cPanel File Upload Demo")
    click.echo(RULE)
    click.echo(f"Target host: {settings.base_url}")
    click.echo(f"User: {settings.username}")
    click.echo()

    client = get_client(settings)
    try:
        with temporary_workspace(workspace) as work_dir:
            report = run_demo(client, settings, work_dir)
        if remove_after:
            remove_demo_artifacts(client, report)
    except CpanelError as e:
        click.echo(RULE, err=True)
        click.echo(click.style("✗ Error during upload process:", fg="red"), err=True)
        click.echo(str(e), err=True)
        click.echo(RULE, err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    finally:
        client.close()

    click.echo(RULE)
    click.echo(click.style("✓ All operations completed successfully!", fg="green"))
    click.echo(RULE)
    click.echo()
    click.echo("Files removed:" if remove_after else "Files created:")
    for remote_path in report.created:
        click.echo(f"  - {remote_path}")


@main.command()
@click.argument("parent")
@click.argument("name")
@click.option("--permissions", default="0755", show_default=True, help="Octal permission mode")
@click.pass_context
def mkdir(ctx: click.Context, parent: str, name: str, permissions: str) -> None:
    """Create directory NAME inside the absolute path PARENT.

    Examples:

        cpanel-upload mkdir /home2/acct/public_html reports
    """
    settings = _resolve_settings(ctx)
    try:
        with get_client(settings) as client:
            result = client.create_directory(parent, name, permissions)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    if result.already_existed:
        _report(result, f"Directory already exists: {name}")
    else:
        _report(result, f"Created directory: {name}")


@main.command()
@click.argument("remote_dir")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.pass_context
def upload(ctx: click.Context, remote_dir: str, files: tuple[Path, ...]) -> None:
    """Upload FILES into REMOTE_DIR (relative to the account home).

    Examples:

        cpanel-upload upload public_html index.html

        cpanel-upload upload public_html/docs *.txt
    """
    settings = _resolve_settings(ctx)
    try:
        with get_client(settings) as client:
            result = client.upload_files(remote_dir, list(files))
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    _report(result, f"{len(files)} file(s) uploaded to {remote_dir}")


@main.command("rm")
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def remove_files(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Delete files given as paths relative to the account home.

    Examples:

        cpanel-upload rm public_html/old.txt
    """
    settings = _resolve_settings(ctx)
    try:
        with get_client(settings) as client:
            result = client.delete_files(list(paths))
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    _report(result, f"Deleted {len(paths)} file(s)")


@main.command("rmdir")
@click.argument("path")
@click.pass_context
def remove_directory(ctx: click.Context, path: str) -> None:
    """Ask cPanel to delete directory PATH (relative to the account home).

    A non-empty directory may be left in place; delete its files first.
    """
    settings = _resolve_settings(ctx)
    try:
        with get_client(settings) as client:
            result = client.delete_directory(path)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    _report(result, f"Directory removal accepted: {path}")


if __name__ == "__main__":
    main()
