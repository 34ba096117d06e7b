"""Command-line view of asset publishing status."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

import colorama
from colorama import Fore, Style
from pydantic import ValidationError

from .backend import BackendClient
from .exceptions import BackendError
from .poller import AssetPoller
from .publishing import (
    Asset,
    AssetAggregateState,
    ListingPage,
    ListingQuery,
    list_assets,
    resolve_state,
    supported_platforms,
)
from .publishing.settings import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS, POLL_INTERVAL_SECONDS
from .publishing.utils import relative_time, utcnow
from .settings import load_backend_settings

STATUS_COLORS = {
    AssetAggregateState.PUBLISHED: Fore.GREEN,
    AssetAggregateState.FAILED: Fore.RED,
    AssetAggregateState.PROCESSING: Fore.YELLOW,
    AssetAggregateState.SCHEDULED: Fore.CYAN,
    AssetAggregateState.PENDING: Fore.BLUE,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dashboard", description=__doc__)
    parser.add_argument("--backend", help="Asset backend base URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log backend requests")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("list", "Print one page of assets with their publishing status"),
        ("watch", "Keep printing the listing while uploads are processing"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--search", default="")
        cmd.add_argument(
            "--status",
            default="all",
            choices=["all"] + [state.value for state in AssetAggregateState],
        )
        cmd.add_argument(
            "--sort", default="createdAt", choices=["createdAt", "publishTime", "title"]
        )
        cmd.add_argument("--asc", action="store_true", help="Sort ascending")
        cmd.add_argument("--page", type=int, default=1)
        cmd.add_argument(
            "--per-page", type=int, default=DEFAULT_PAGE_SIZE, choices=PAGE_SIZE_OPTIONS
        )
    return parser


def _report_error(exc: BackendError) -> None:
    print(f"{Fore.RED}Error: {exc}{Style.RESET_ALL}", file=sys.stderr)


def format_page(page: ListingPage) -> List[str]:
    now = utcnow()
    lines: List[str] = []
    for row in page.rows:
        asset: Asset = row.asset
        color = STATUS_COLORS.get(row.status, "")
        platforms = " ".join(
            f"{name}={resolve_state(asset, name, now=now).value}"
            for name in supported_platforms()
        )
        lines.append(
            f"{color}{row.status.value:<10}{Style.RESET_ALL} "
            f"{asset.title or 'Untitled'} "
            f"({relative_time(asset.created_at, now)}) {platforms}"
        )
    if not page.rows:
        lines.append("No uploads to show")
    lines.append(
        f"Total items: {page.total}, Filtered: {page.filtered}, "
        f"Page {page.page} of {page.total_pages}"
    )
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    colorama.init(autoreset=True)
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING, format="%(message)s"
    )

    try:
        query = ListingQuery(
            search=args.search,
            status=args.status,
            sort_key=args.sort,
            sort_dir="asc" if args.asc else "desc",
            page=args.page,
            per_page=args.per_page,
        )
    except ValidationError as exc:
        parser.error(str(exc))

    client = BackendClient(load_backend_settings(args.backend))

    def _print(assets: List[Asset]) -> None:
        for line in format_page(list_assets(assets, query)):
            print(line)

    if args.command == "list":
        try:
            assets = client.fetch_assets()
        except BackendError as exc:
            _report_error(exc)
            return 1
        _print(assets)
        return 0

    poller = AssetPoller(
        client.fetch_assets,
        interval=POLL_INTERVAL_SECONDS,
        on_update=_print,
        on_error=_report_error,
    )
    with poller:
        try:
            keep_polling = poller.refresh()
        except BackendError as exc:
            _report_error(exc)
            return 1
        if keep_polling:
            poller.start(delay=poller.interval)
            try:
                poller.join()
            except KeyboardInterrupt:
                pass
            if poller.failure is not None:
                print(
                    f"{Fore.RED}Error: {poller.failure}{Style.RESET_ALL}", file=sys.stderr
                )
                return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
