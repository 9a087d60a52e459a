"""CLI entry point: python -m apicatalog {build,lookup,search,categories,category,overview}"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from apicatalog import settings
from apicatalog.builder import build_catalog, write_dataset
from apicatalog.catalog import ApiCatalog
from apicatalog.errors import CatalogError
from apicatalog.render import format_api_markdown, format_search_results

logger = logging.getLogger(__name__)


def _add_data_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data", default=str(settings.DATA_FILE), metavar="FILE",
                        help=f"Dataset JSON file (default: {settings.DATA_FILE})")


def _add_json_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", default=False,
                        help="Print the structured payload as JSON")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apicatalog",
        description=(
            "Build a catalog of API entries from a documentation page and\n"
            "query it by identifier, keyword or category."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Extract a dataset from a saved HTML page")
    build.add_argument("--html", required=True, metavar="FILE",
                       help="Saved HTML of the documentation page ('-' for stdin)")
    build.add_argument("--source", default=settings.SOURCE_URL, metavar="URL",
                       help=f"URL the page came from (default: {settings.SOURCE_URL})")
    build.add_argument("--root-selector", default=settings.ROOT_SELECTOR, metavar="CSS",
                       help=f"Container holding the headings (default: {settings.ROOT_SELECTOR!r})")
    build.add_argument("--out", default=str(settings.DATA_FILE), metavar="FILE",
                       help=f"Output dataset file (default: {settings.DATA_FILE})")

    lookup = sub.add_parser("lookup", help="Resolve one API by slug, anchor or title")
    lookup.add_argument("identifier")
    _add_data_arg(lookup)
    _add_json_arg(lookup)

    search = sub.add_parser("search", help="Keyword search with optional category filter")
    search.add_argument("query", nargs="?", default="")
    search.add_argument("--category", default=None, metavar="ID",
                        help="Only return entries from this category")
    search.add_argument("--limit", type=int, default=settings.DEFAULT_SEARCH_LIMIT, metavar="N",
                        help=(f"Maximum results, 1-{settings.MAX_SEARCH_LIMIT} "
                              f"(default: {settings.DEFAULT_SEARCH_LIMIT})"))
    search.add_argument("--plain", action="store_true", default=False,
                        help="Print a numbered plain-text listing instead of a table")
    _add_data_arg(search)
    _add_json_arg(search)

    categories = sub.add_parser("categories", help="List categories")
    _add_data_arg(categories)
    _add_json_arg(categories)

    category = sub.add_parser("category", help="Show one category and its entries")
    category.add_argument("category_id", metavar="ID")
    _add_data_arg(category)
    _add_json_arg(category)

    overview = sub.add_parser("overview", help="Print the catalogue summary as JSON")
    _add_data_arg(overview)
    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_build(args: argparse.Namespace) -> int:
    if args.html == "-":
        html = sys.stdin.buffer.read()
    else:
        html = Path(args.html).read_bytes()
    dataset = build_catalog(html, args.source, root_selector=args.root_selector)
    out = write_dataset(dataset, args.out)
    print(f"Wrote {dataset.count} API entries to {out}")
    return 0


def _cmd_lookup(args: argparse.Namespace) -> int:
    catalog = ApiCatalog.from_file(args.data)
    entry = catalog.lookup(args.identifier)
    if entry is None:
        print(f"No API entry matches {args.identifier!r}.", file=sys.stderr)
        return 1
    payload = catalog.payload(entry)
    if args.json:
        _print_json(payload)
        return 0

    from rich.console import Console
    from rich.markdown import Markdown

    Console().print(Markdown(format_api_markdown(payload)))
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    catalog = ApiCatalog.from_file(args.data)
    results = [catalog.payload(e) for e in catalog.search(args.query, args.category, args.limit)]
    if args.json:
        _print_json({"results": results})
        return 0
    if args.plain or not results:
        print(format_search_results(results))
        return 0

    from rich import box
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    tbl = Table(
        title=f"[bold green]Matching APIs ({len(results)})[/bold green]",
        box=box.SIMPLE_HEAVY,
    )
    tbl.add_column("#",        style="dim",   justify="right", width=4, no_wrap=True)
    tbl.add_column("Slug",     style="cyan",  no_wrap=True)
    tbl.add_column("Title",    max_width=48)
    tbl.add_column("Category", style="green", max_width=24)
    tbl.add_column("Refs",     justify="right", width=5)
    for i, r in enumerate(results, 1):
        tbl.add_row(
            str(i), escape(r["slug"]), escape(r["title"]), escape(r["category"]),
            str(len(r["references"])),
        )
    Console().print(tbl)
    return 0


def _cmd_categories(args: argparse.Namespace) -> int:
    catalog = ApiCatalog.from_file(args.data)
    categories = catalog.list_categories()
    if args.json:
        _print_json(categories)
        return 0

    from rich import box
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    tbl = Table(title="[bold cyan]Categories[/bold cyan]", box=box.SIMPLE_HEAVY)
    tbl.add_column("ID",    style="cyan", no_wrap=True)
    tbl.add_column("Title")
    tbl.add_column("APIs",  justify="right", width=5)
    for c in categories:
        tbl.add_row(escape(c["id"]), escape(c["title"]), str(c["entryCount"]))
    Console().print(tbl)
    return 0


def _cmd_category(args: argparse.Namespace) -> int:
    catalog = ApiCatalog.from_file(args.data)
    category = catalog.get_category(args.category_id)
    if category is None:
        print(f"Category {args.category_id!r} does not exist in the catalogue.", file=sys.stderr)
        return 1
    if args.json:
        _print_json(catalog.category_payload(category))
        return 0

    from rich.console import Console
    from rich.markup import escape
    from rich.panel import Panel

    lines = [f"[cyan]{escape(e.slug)}[/cyan]  {escape(e.title)}" for e in category.entries]
    Console().print(
        Panel.fit(
            "\n".join(lines),
            title=f"[bold]{escape(category.title)}[/bold] ({category.entry_count})",
            border_style="cyan",
        ),
    )
    return 0


def _cmd_overview(args: argparse.Namespace) -> int:
    _print_json(ApiCatalog.from_file(args.data).overview())
    return 0


_COMMANDS = {
    "build": _cmd_build,
    "lookup": _cmd_lookup,
    "search": _cmd_search,
    "categories": _cmd_categories,
    "category": _cmd_category,
    "overview": _cmd_overview,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        return _COMMANDS[args.command](args)
    except (CatalogError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
