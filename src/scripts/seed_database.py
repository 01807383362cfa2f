"""
Seed the record store from a drug data file.

Clears existing drugs (unless --keep-existing), imports the file in batches
skipping duplicate codes, then logs database statistics.

Usage:
    drug-info-seed --file "data/drugData 2025.json"
"""
import argparse
import logging
import sys
from typing import List, Optional
from src.core import config
from src.core.dependencies import get_company_service, get_drug_repository, get_drug_service, get_file_service
from src.core.exceptions import DrugInfoException
from src.core.logging_config import configure_logging
from src.repositories.dynamo_repository import DynamoRepository

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import drug records into the record store")
    parser.add_argument("--file", required=True, help="JSON or CSV drug data file")
    parser.add_argument("--batch-size", type=int, default=100, help="Drugs inserted per batch (default 100)")
    parser.add_argument("--keep-existing", action="store_true", help="Do not clear the store before importing")
    parser.add_argument("--top", type=int, default=10, help="Number of top companies to report (default 10)")
    return parser


def log_statistics(top: int) -> None:
    """Log totals, launch date range and the companies with the most drugs."""
    repository = get_drug_repository()
    stats = get_company_service().company_stats().company_stats

    logger.info("Database statistics:")
    logger.info("Total drugs: %d", repository.count())
    logger.info("Unique companies: %d", len(stats))
    if stats:
        earliest = min(entry.earliest_launch for entry in stats)
        latest = max(entry.latest_launch for entry in stats)
        logger.info("Date range: %s to %s", earliest.date().isoformat(), latest.date().isoformat())

    logger.info("Top %d companies by drug count:", top)
    for rank, entry in enumerate(stats[:top], start=1):
        logger.info("%d. %s: %d drugs", rank, entry.company, entry.drug_count)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(config.settings.log_level)

    try:
        repository = get_drug_repository()
        if isinstance(repository, DynamoRepository):
            repository.create_table()
        logger.info("Using %s record store", repository.backend_name)

        drugs = get_file_service().load_drugs(args.file)
        logger.info("Found %d drugs to import", len(drugs))

        summary = get_drug_service().import_drugs(
            drugs,
            batch_size=args.batch_size,
            replace=not args.keep_existing
        )
        logger.info(
            "Successfully imported %d drugs (%d duplicates skipped)",
            summary.imported_count,
            summary.skipped_count
        )
        log_statistics(args.top)
    except DrugInfoException as e:
        logger.error("Error seeding database: %s", e.message, exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
