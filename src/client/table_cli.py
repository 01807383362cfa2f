"""
Print one page of the drug table from a running Drug Information API.

Usage:
    drug-info-table --company "Cipla" --page 2
"""
import argparse
import logging
import sys
from typing import List, Optional
from src.client.api_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DrugApiClient
from src.client.table_controller import DrugTableController
from src.client.table_state import LoadPhase
from src.client.table_view import render_text
from src.core import config
from src.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the drug table")
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="API base URL (default from DRUG_API_URL)")
    parser.add_argument("--company", default="", help="Only show drugs from this company")
    parser.add_argument("--page", type=int, default=1, help="Page to show (default 1)")
    parser.add_argument("--page-size", type=int, help="Rows per page (default from /api/config)")
    parser.add_argument("--sort-by", help="Column to sort on (default from /api/config)")
    parser.add_argument("--sort-order", choices=("asc", "desc"), help="Sort direction")
    return parser


def main(argv: Optional[List[str]] = None, api: Optional[DrugApiClient] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.page < 1:
        parser.error("--page must be 1 or greater")
    if args.page_size is not None and args.page_size < 1:
        parser.error("--page-size must be 1 or greater")
    configure_logging(config.settings.log_level)

    controller = DrugTableController(api or DrugApiClient(args.url, timeout=DEFAULT_TIMEOUT))
    try:
        state = controller.load_initial()
        # Company, page size and sort each reset to page 1, so the page goes last
        if state.phase == LoadPhase.READY and args.company:
            state = controller.select_company(args.company).result()
        if state.phase == LoadPhase.READY and args.page_size:
            state = controller.change_page_size(args.page_size).result()
        if state.phase == LoadPhase.READY and (args.sort_by or args.sort_order):
            state = controller.change_sort(
                args.sort_by or state.sort_field,
                args.sort_order or state.sort_direction
            ).result()
        if state.phase == LoadPhase.READY and args.page > 1:
            state = controller.change_page(args.page).result()
    finally:
        controller.close()

    print(render_text(state))
    return 1 if state.phase == LoadPhase.ERROR else 0


if __name__ == "__main__":
    sys.exit(main())
