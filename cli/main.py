"""Serpa CLI — entry-point for the analysis pipelines.

Usage:
    python cli/main.py --help

Commands:
    analyze     → topic analysis of a live domain
    blog-ratio  → blog versus website ratio of a live domain
    keywords    → offline keyword extraction from a URL list file
    folders     → offline folder grouping of a URL list file
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from serpa.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import List, Optional

import typer

from cli.rendering import render_folder_tree, render_ratio_summary, render_topic_summary

app = typer.Typer(
    name="serpa",
    help="Serpa website content analysis CLI.",
    no_args_is_help=True,
)


def _read_urls(path: Path) -> List[str]:
    """Read one URL per line, skipping blanks and ``#`` comments."""
    if not path.exists():
        typer.echo(f"[serpa] File not found: {path}")
        raise typer.Exit(1)
    lines = path.read_text(encoding="utf-8").splitlines()
    return [ln.strip() for ln in lines if ln.strip() and not ln.strip().startswith("#")]


# ---------------------------------------------------------------------------
# Live analyses
# ---------------------------------------------------------------------------
@app.command("analyze")
def analyze(
    domain: str = typer.Option(..., help="Domain to analyse, e.g. example.com."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload."),
) -> None:
    """Group a site's URLs into its main topics plus outliers."""
    from serpa.pipeline.runner import run_topic_analysis

    try:
        result = run_topic_analysis(domain)
    except Exception as exc:
        typer.echo(f"[analyze] ✗ {exc}")
        raise typer.Exit(1)

    typer.echo(json.dumps(result, indent=2) if as_json else render_topic_summary(result))


@app.command("blog-ratio")
def blog_ratio(
    domain: str = typer.Option(..., help="Domain to analyse, e.g. example.com."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload."),
) -> None:
    """Measure the share of blog pages versus core website pages."""
    from serpa.pipeline.blog_ratio import run_blog_ratio

    try:
        result = run_blog_ratio(domain)
    except Exception as exc:
        typer.echo(f"[blog-ratio] ✗ {exc}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result, indent=2))
        return
    typer.echo(render_ratio_summary(result))
    typer.echo("")
    typer.echo(render_folder_tree(result["domain"], result["websiteFolders"]))


# ---------------------------------------------------------------------------
# Offline helpers (no external calls)
# ---------------------------------------------------------------------------
@app.command("keywords")
def keywords(
    file: Path = typer.Option(..., "--file", help="Text file with one URL per line."),
    domain: Optional[str] = typer.Option(None, help="Keep only URLs on this domain."),
) -> None:
    """Filter a URL list and print the keywords extracted from each path."""
    from serpa.discovery.normalizer import filter_urls, normalize_domain
    from serpa.keywords.extractor import extract_keywords

    urls = _read_urls(file)
    valid = filter_urls(urls, normalize_domain(domain) if domain else None)
    records = extract_keywords(valid)
    typer.echo(f"[keywords] {len(records)}/{len(urls)} URL(s) with keywords")
    for record in records:
        typer.echo(f"  {record.url}  →  {record.keywords}")


@app.command("folders")
def folders(
    file: Path = typer.Option(..., "--file", help="Text file with one URL per line."),
    collapse: bool = typer.Option(True, help="Fold small folders into 'Other'."),
) -> None:
    """Group a URL list by first path segment and print the folder tree."""
    from serpa.structure.folders import collapse_other, group_by_folder

    urls = list(dict.fromkeys(_read_urls(file)))
    groups = group_by_folder(urls)
    if collapse:
        groups = collapse_other(groups, len(urls))
    typer.echo(render_folder_tree(f"{len(urls)} URL(s)", [g.to_dict() for g in groups]))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
