"""
hashcheck CLI.

Command-line interface for creating, verifying and inspecting hash manifests.
"""

from __future__ import annotations

import glob
from pathlib import Path
from typing import NoReturn

import click

from hashcheck import __version__
from hashcheck.config import CheckConfig, load_config
from hashcheck.core.hasher import DIGEST_ALGORITHMS
from hashcheck.core.verifier import EntryStatus, UnreadablePolicy, VerificationReport
from hashcheck.errors import HashCheckError, UsageError
from hashcheck.log import setup_logging

_STATUS_LINES = {
    EntryStatus.VALID: ("[✓] Valid", "green"),
    EntryStatus.MISMATCH: ("[!] Hash mismatch", "red"),
    EntryStatus.MISSING: ("[!] Missing file", "red"),
    EntryStatus.UNREADABLE: ("[!] Unreadable file", "red"),
}


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise SystemExit(1)


def _settings(ctx: click.Context, **overrides) -> CheckConfig:
    """Config from the group options, with command options applied on top."""
    config: CheckConfig = ctx.obj["config"]
    try:
        return config.merged(**overrides)
    except UsageError as e:
        raise click.UsageError(str(e), ctx=ctx) from e


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config YAML")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--verbose", "-v", is_flag=True, help="Shortcut for --log-level INFO")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, log_level: str | None, verbose: bool) -> None:
    """hashcheck: Create and verify directory hash manifests."""
    try:
        config = load_config(config_path)
        if verbose and log_level is None:
            log_level = "INFO"
        config = config.merged(log_level=log_level)
    except UsageError as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    setup_logging(config.log_level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
@click.argument("target_dir", type=click.Path())
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Manifest file to write")
@click.option("--algorithm", "-a", type=click.Choice(DIGEST_ALGORITHMS), help="Digest algorithm")
@click.option("--workers", "-j", type=click.IntRange(min=1), help="Hashing threads")
@click.option("--exclude", "-x", multiple=True, help="Glob of relative paths to skip")
@click.pass_context
def create(
    ctx: click.Context,
    target_dir: str,
    output: str | None,
    algorithm: str | None,
    workers: int | None,
    exclude: tuple[str, ...],
) -> None:
    """Create a hash manifest for TARGET_DIR."""
    from hashcheck.core.builder import build_manifest
    from hashcheck.core.codec import manifest_filename, save_manifest
    from hashcheck.core.walker import check_root

    settings = _settings(ctx, algorithm=algorithm, workers=workers, exclude=exclude or None)

    try:
        root = check_root(Path(target_dir)).resolve()
    except HashCheckError as e:
        _fail(str(e))

    output_path = Path(output) if output else Path.cwd() / manifest_filename(root, settings.extension)
    output_path = output_path.resolve()

    skip = list(settings.exclude)
    # A manifest written inside the tree must not list itself
    if output_path.is_relative_to(root):
        skip.append(glob.escape(output_path.relative_to(root).as_posix()))

    try:
        manifest = build_manifest(
            root,
            algorithm=settings.algorithm,
            workers=settings.workers,
            exclude=skip,
        )
        save_manifest(manifest, output_path)
    except (HashCheckError, OSError) as e:
        _fail(str(e))

    click.echo(click.style(f"Hash file created: {output_path}", fg="green"))
    click.echo(f"Entries: {len(manifest)}")
    click.echo(f"Fingerprint: {manifest.fingerprint()}")


@main.command()
@click.argument("target_dir", type=click.Path())
@click.argument("manifest_file", type=click.Path())
@click.option("--algorithm", "-a", type=click.Choice(DIGEST_ALGORITHMS), help="Digest algorithm")
@click.option("--workers", "-j", type=click.IntRange(min=1), help="Hashing threads")
@click.option("--exclude", "-x", multiple=True, help="Glob of relative paths never reported as extra")
@click.option(
    "--on-unreadable",
    type=click.Choice([p.value for p in UnreadablePolicy]),
    help="Abort on an unreadable file, or record it and continue",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.option("--fail-on-diff", is_flag=True, help="Exit with status 1 unless every file is valid")
@click.pass_context
def verify(
    ctx: click.Context,
    target_dir: str,
    manifest_file: str,
    algorithm: str | None,
    workers: int | None,
    exclude: tuple[str, ...],
    on_unreadable: str | None,
    as_json: bool,
    fail_on_diff: bool,
) -> None:
    """Verify TARGET_DIR against MANIFEST_FILE."""
    from hashcheck.core.codec import load_manifest
    from hashcheck.core.verifier import verify_manifest
    from hashcheck.core.walker import check_root

    settings = _settings(
        ctx,
        algorithm=algorithm,
        workers=workers,
        exclude=exclude or None,
        on_unreadable=on_unreadable,
    )

    try:
        root = check_root(Path(target_dir)).resolve()
        manifest = load_manifest(Path(manifest_file))
    except HashCheckError as e:
        _fail(str(e))

    skip = list(settings.exclude)
    manifest_path = Path(manifest_file).resolve()
    if manifest_path.is_relative_to(root):
        skip.append(glob.escape(manifest_path.relative_to(root).as_posix()))

    def _show(path: str, status: EntryStatus) -> None:
        label, color = _STATUS_LINES[status]
        click.echo(click.style(f"{label}: {path}", fg=color))

    try:
        report = verify_manifest(
            root,
            manifest,
            algorithm=settings.algorithm,
            workers=settings.workers,
            on_unreadable=settings.on_unreadable,
            exclude=skip,
            on_entry=None if as_json else _show,
        )
    except (HashCheckError, OSError) as e:
        _fail(str(e))

    if as_json:
        click.echo(report.to_json())
    else:
        _print_summary(report, [entry.relative_path for entry in manifest])

    if fail_on_diff and not report.is_clean:
        raise SystemExit(1)


def _print_summary(report: VerificationReport, manifest_order: list[str]) -> None:
    click.echo(click.style("\n--- Summary ---", fg="yellow"))
    if report.is_clean:
        click.echo(click.style("All files are valid", fg="green"))
        return

    sections = [
        ("Missing files", [p for p in manifest_order if p in report.missing], "red"),
        ("Files with hash mismatch", [p for p in manifest_order if p in report.mismatched], "red"),
        ("Unreadable files", [p for p in manifest_order if p in report.unreadable], "red"),
        ("Extra files (not in hash file)", sorted(report.extra), "yellow"),
    ]
    for title, paths, color in sections:
        if not paths:
            continue
        click.echo(click.style(f"{title} ({len(paths)}):", fg=color))
        for path in paths:
            click.echo(f"  {path}")


@main.command()
@click.argument("manifest_file", type=click.Path())
@click.option("--entries/--no-entries", default=False, help="List every entry")
def inspect(manifest_file: str, entries: bool) -> None:
    """Check that MANIFEST_FILE parses and show a summary."""
    from hashcheck.core.codec import load_manifest

    try:
        manifest = load_manifest(Path(manifest_file))
    except HashCheckError as e:
        _fail(str(e))

    click.echo("=== Manifest ===")
    click.echo(f"File: {manifest_file}")
    click.echo(f"Entries: {len(manifest)}")
    click.echo(f"Fingerprint: {manifest.fingerprint()}")

    if entries:
        for entry in manifest:
            click.echo(f"  {entry.relative_path}  {entry.digest[:12]}...")


if __name__ == "__main__":
    main()
