"""
Command line interface for the birthbuild site engine.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .checkpoints import (
    Checkpoint,
    CheckpointStore,
    DeployController,
    build_deploy_files,
    read_live_state,
    remove_page_section,
    reorder_page_sections,
    restyle_pages,
)
from .config import ConfigError, Photo, SiteSpec, get_secrets, get_settings, load_photos, load_site_inputs, resolve_photos
from .config.density import calculate_density_score
from .design.css_editor import CssVariables
from .errors import BirthbuildError, DeployInProgressError
from .hosting import DirectoryHost, ExportReport, Host, NetlifyHost, export_files
from .pipeline import generate_site, site_base_url
from .sections import get_section_names

console = Console()
app = typer.Typer(help="Generate, version and deploy birth worker websites.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]
PUBLIC_DIRNAME = "public"


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("BIRTHBUILD_LOG_LEVEL")
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_spec_path(value: Optional[Path]) -> Optional[Path]:
    """Ensure a spec/photo path exists and return its absolute path."""
    if value is None:
        return None
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Path must be a file, got directory: {resolved}")
    return resolved


def _fail(label: str, exc: Exception) -> NoReturn:
    console.print(f"[bold red]{label}:[/] {exc}")
    raise typer.Exit(code=1) from exc


def _load_inputs_or_exit(spec_path: Path, photos_path: Optional[Path] = None) -> tuple[SiteSpec, List[Photo]]:
    try:
        spec, photos = load_site_inputs(spec_path)
        if photos_path is not None:
            photos = photos + load_photos(photos_path)
    except ConfigError as exc:
        _fail("Configuration error", exc)
    return spec, photos


def _store(data_root: Optional[Path]) -> CheckpointStore:
    return CheckpointStore(data_root or get_settings().data_root)


def _select_checkpoint(
    store: CheckpointStore,
    site: str,
    checkpoint_id: Optional[str],
    version: Optional[int],
) -> Checkpoint:
    if checkpoint_id:
        return store.get(site, checkpoint_id)
    if version is not None:
        return store.get_version(site, version)
    latest = store.latest(site)
    if latest is None:
        raise typer.BadParameter(f"Site {site} has no checkpoints yet; run `birthbuild generate` first.")
    return latest


def _print_rows(title: str, rows) -> None:
    table = Table(title=title)
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in rows:
        table.add_row(key, value)
    console.print(table)


def _print_export_report(report: ExportReport) -> None:
    _print_rows("Export Summary", report.summary_rows())


def _spec_option() -> Path:
    return typer.Option(
        ...,
        "--spec",
        "-s",
        help="Path to the site spec (TOML or JSON).",
        callback=_resolve_spec_path,
    )


def _site_option() -> str:
    return typer.Option(..., "--site", help="Site id (the site file's id or slugified business name).")


def _data_root_option() -> Optional[Path]:
    return typer.Option(
        None,
        "--data-root",
        help="Checkpoint data directory (defaults to BIRTHBUILD_HOME or ./birthbuild_data).",
    )


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show birthbuild version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]birthbuild[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]birthbuild[/] is ready. Run [cyan]birthbuild generate --spec path/to/site.toml[/] "
            "to build a first checkpoint.",
        )


@app.command()
def generate(
    spec: Path = _spec_option(),
    photos: Optional[Path] = typer.Option(
        None,
        "--photos",
        "-p",
        help="Optional photo list (JSON array or TOML with [[photo]] blocks).",
        callback=_resolve_spec_path,
    ),
    label: Optional[str] = typer.Option(None, "--label", "-l", help="Label stored with the checkpoint."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also export the generated files to this directory.",
    ),
    data_root: Optional[Path] = _data_root_option(),
) -> None:
    """
    Generate every enabled page and store the result as a new checkpoint.
    """
    settings = get_settings()
    site_spec, photo_list = _load_inputs_or_exit(spec, photos)
    resolved_photos = resolve_photos(photo_list, settings.storage_url)
    logger.info("Loaded spec %s with %d photo(s)", site_spec.id, len(resolved_photos))

    store = _store(data_root)
    site = generate_site(site_spec, resolved_photos, base_domain=settings.base_domain)
    default_label = "Initial build" if store.latest(site_spec.id) is None else "Regenerated"
    try:
        checkpoint = store.create_from_site(site_spec.id, site, label=label or default_label)
    except BirthbuildError as exc:
        _fail("Checkpoint error", exc)

    _print_rows(
        "Generation Summary",
        [
            ("Site", site_spec.id),
            ("Checkpoint", f"v{checkpoint.version} ({checkpoint.id})"),
            ("Pages", ", ".join(checkpoint.filenames)),
            ("Spec hash", site_spec.hash),
        ],
    )

    if output is not None:
        files = build_deploy_files(checkpoint, site_base_url(site_spec, settings.base_domain))
        try:
            report = export_files(output, files)
        except BirthbuildError as exc:
            _fail("Export error", exc)
        _print_export_report(report)

    console.print("[bold green]Generation complete.[/]")


@app.command()
def history(
    site: str = _site_option(),
    data_root: Optional[Path] = _data_root_option(),
) -> None:
    """
    List a site's checkpoints, newest first, marking the live one.
    """
    store = _store(data_root)
    try:
        checkpoints = store.list(site)
        live = read_live_state(store, site)
    except BirthbuildError as exc:
        _fail("Checkpoint error", exc)

    if not checkpoints:
        console.print(f"[yellow]No checkpoints for {site}.[/]")
        return

    table = Table(title=f"Checkpoints for {site}")
    table.add_column("Version", justify="right")
    table.add_column("Id")
    table.add_column("Label", overflow="fold")
    table.add_column("Created")
    table.add_column("Pages", justify="right")
    table.add_column("Live")
    for checkpoint in checkpoints:
        is_live = live is not None and live.checkpoint_id == checkpoint.id
        table.add_row(
            str(checkpoint.version),
            checkpoint.id,
            checkpoint.label or "",
            checkpoint.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            str(len(checkpoint.pages)),
            "[bold green]live[/]" if is_live else "",
        )
    console.print(table)


@app.command()
def deploy(
    site: str = _site_option(),
    checkpoint: Optional[str] = typer.Option(None, "--checkpoint", "-c", help="Checkpoint id to deploy."),
    version: Optional[int] = typer.Option(None, "--version", "-n", help="Checkpoint version to deploy."),
    slug: Optional[str] = typer.Option(None, "--slug", help="Subdomain to publish under (defaults to the site id)."),
    netlify: bool = typer.Option(
        False,
        "--netlify",
        help="Publish through the Netlify API instead of the local public directory.",
    ),
    data_root: Optional[Path] = _data_root_option(),
) -> None:
    """
    Deploy a checkpoint (latest by default); older versions roll the site back.
    """
    settings = get_settings()
    store = _store(data_root)
    host: Host
    try:
        if netlify:
            host = NetlifyHost(
                get_secrets().netlify_api_token or "",
                base_domain=settings.base_domain,
                timeout=settings.deploy_timeout,
            )
        else:
            host = DirectoryHost(store.root / PUBLIC_DIRNAME)
        target = _select_checkpoint(store, site, checkpoint, version)
        result = DeployController(store, host, base_domain=settings.base_domain).deploy(
            site, target.id, site_slug=slug
        )
    except DeployInProgressError as exc:
        _fail("Deploy rejected", exc)
    except BirthbuildError as exc:
        _fail("Deploy error", exc)

    if not result.success:
        console.print(f"[bold red]Deploy failed:[/] {result.error}")
        console.print("[yellow]The previously live version is still being served.[/]")
        raise typer.Exit(code=1)

    console.print(f"[bold green]Deployed v{result.version}[/] → {result.deploy_url}")


@app.command()
def sections(
    site: str = _site_option(),
    page: str = typer.Option("index.html", "--page", help="Page filename inside the checkpoint."),
    checkpoint: Optional[str] = typer.Option(None, "--checkpoint", "-c", help="Checkpoint id (defaults to latest)."),
    data_root: Optional[Path] = _data_root_option(),
) -> None:
    """
    Show the named sections of one page, in document order.
    """
    store = _store(data_root)
    try:
        source = _select_checkpoint(store, site, checkpoint, None)
    except BirthbuildError as exc:
        _fail("Checkpoint error", exc)
    generated = source.page(page)
    if generated is None:
        console.print(f"[bold red]Page not found:[/] {page} is not part of v{source.version}")
        raise typer.Exit(code=1)
    for index, name in enumerate(get_section_names(generated.html), start=1):
        console.print(f"{index}. {name}")


@app.command()
def reorder(
    site: str = _site_option(),
    page: str = typer.Option(..., "--page", help="Page filename inside the checkpoint."),
    order: str = typer.Option(..., "--order", help="Comma-separated section names in the new order."),
    checkpoint: Optional[str] = typer.Option(None, "--checkpoint", "-c", help="Source checkpoint id (defaults to latest)."),
    label: Optional[str] = typer.Option(None, "--label", "-l", help="Label for the new checkpoint."),
    data_root: Optional[Path] = _data_root_option(),
) -> None:
    """
    Reorder sections on a page, storing the result as a new checkpoint.
    """
    names = [name.strip() for name in order.split(",") if name.strip()]
    store = _store(data_root)
    try:
        source = _select_checkpoint(store, site, checkpoint, None)
        result = reorder_page_sections(store, site, source.id, page, names, label)
    except BirthbuildError as exc:
        _fail("Edit error", exc)
    _report_edit(source, result)


@app.command("remove-section")
def remove_section_command(
    site: str = _site_option(),
    page: str = typer.Option(..., "--page", help="Page filename inside the checkpoint."),
    name: str = typer.Option(..., "--name", help="Section to remove."),
    checkpoint: Optional[str] = typer.Option(None, "--checkpoint", "-c", help="Source checkpoint id (defaults to latest)."),
    label: Optional[str] = typer.Option(None, "--label", "-l", help="Label for the new checkpoint."),
    data_root: Optional[Path] = _data_root_option(),
) -> None:
    """
    Remove a section from a page, storing the result as a new checkpoint.
    """
    store = _store(data_root)
    try:
        source = _select_checkpoint(store, site, checkpoint, None)
        result = remove_page_section(store, site, source.id, page, name, label)
    except BirthbuildError as exc:
        _fail("Edit error", exc)
    _report_edit(source, result)


@app.command()
def restyle(
    site: str = _site_option(),
    background: Optional[str] = typer.Option(None, "--background", help="Background colour (#RRGGBB)."),
    primary: Optional[str] = typer.Option(None, "--primary", help="Primary colour (#RRGGBB)."),
    accent: Optional[str] = typer.Option(None, "--accent", help="Accent colour (#RRGGBB)."),
    text: Optional[str] = typer.Option(None, "--text", help="Body text colour (#RRGGBB)."),
    cta: Optional[str] = typer.Option(None, "--cta", help="Button colour (#RRGGBB)."),
    heading_font: Optional[str] = typer.Option(None, "--heading-font", help="Heading font from the curated list."),
    body_font: Optional[str] = typer.Option(None, "--body-font", help="Body font from the curated list."),
    checkpoint: Optional[str] = typer.Option(None, "--checkpoint", "-c", help="Source checkpoint id (defaults to latest)."),
    label: Optional[str] = typer.Option(None, "--label", "-l", help="Label for the new checkpoint."),
    data_root: Optional[Path] = _data_root_option(),
) -> None:
    """
    Change colours or fonts on every page, storing the result as a new checkpoint.
    """
    changes = CssVariables(
        background=background,
        primary=primary,
        accent=accent,
        text=text,
        cta=cta,
        font_heading=heading_font,
        font_body=body_font,
    )
    if changes.is_empty():
        raise typer.BadParameter("Pass at least one colour or font option.")
    store = _store(data_root)
    try:
        source = _select_checkpoint(store, site, checkpoint, None)
        result = restyle_pages(store, site, source.id, changes, label)
    except BirthbuildError as exc:
        _fail("Edit error", exc)
    _report_edit(source, result)


def _report_edit(source: Checkpoint, result: Checkpoint) -> None:
    if result.id == source.id:
        console.print(f"[yellow]No change;[/] v{source.version} already matches.")
        return
    console.print(f"[bold green]Created v{result.version}[/] from v{source.version}: {result.label}")


@app.command()
def score(spec: Path = _spec_option()) -> None:
    """
    Score how complete a spec is and suggest what to add next.
    """
    site_spec, _ = _load_inputs_or_exit(spec)
    result = calculate_density_score(site_spec)
    _print_rows(
        "Content Density",
        [
            ("Core", str(result.core_score)),
            ("Depth", str(result.depth_score)),
            ("Total", f"{result.total_score} ({result.percentage}%)"),
            ("Level", result.level),
        ],
    )
    for suggestion in result.suggestions:
        console.print(f"- {suggestion}")


@app.command("spec-hash")
def spec_hash(spec: Path = _spec_option()) -> None:
    """
    Output the deterministic hash of a spec file for change detection.
    """
    site_spec, _ = _load_inputs_or_exit(spec)
    console.print(f"[bold green]{site_spec.hash}[/]")


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
