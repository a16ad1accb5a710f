"""
Bulk delete sweep: drain every item from a table page by page.
"""
from dataclasses import dataclass
from typing import Optional
from logger_config import get_logger
from utils.exceptions import SweepIncompleteError
from .dynamodb_service import DynamoDBService

logger = get_logger(__name__)


@dataclass
class SweepResult:
    """Outcome of one sweep. Counters are informational only."""

    success: bool
    error: Optional[Exception] = None
    pages_scanned: int = 0
    items_deleted: int = 0

    @classmethod
    def ok(cls, pages_scanned: int = 0, items_deleted: int = 0) -> "SweepResult":
        return cls(True, None, pages_scanned, items_deleted)

    @classmethod
    def failed(
        cls,
        error: Exception,
        pages_scanned: int = 0,
        items_deleted: int = 0
    ) -> "SweepResult":
        return cls(False, error, pages_scanned, items_deleted)


class BulkDeleteSweeper:
    """
    Deletes every item in a table, one scan page at a time.

    Deletes are issued sequentially in page order, and the next page is only
    scanned after every delete of the previous page has completed. The first
    failing scan or delete ends the sweep; items already deleted stay
    deleted. Re-running the sweep picks up whatever is left.
    """

    def __init__(self, store: DynamoDBService, max_pages: Optional[int] = None):
        """
        Args:
            store: Store bound to the table and its primary key
            max_pages: Stop with a failure after this many scans (None is
                unbounded)
        """
        self.store = store
        self.max_pages = max_pages

    def sweep(self) -> SweepResult:
        pages_scanned = 0
        items_deleted = 0
        cursor = None

        logger.info('Starting delete all')
        try:
            while True:
                if self.max_pages is not None and pages_scanned >= self.max_pages:
                    raise SweepIncompleteError(
                        f'Stopped after {pages_scanned} pages with items possibly left',
                        pages_scanned=pages_scanned
                    )

                page = self.store.scan(cursor)
                pages_scanned += 1

                if not page.has_items:
                    logger.warning('Scan response had no Items collection, stopping')
                    break

                if not page.items:
                    if page.last_evaluated_key is None:
                        break
                    # empty page mid-table, keep following the cursor
                    cursor = page.last_evaluated_key
                    continue

                logger.info(f'Found {page.scanned_count} more items to delete')

                for item in page.items:
                    logger.debug(f'Deleting item {item}')
                    self.store.delete_item(item[self.store.primary_key])
                    items_deleted += 1

                # None restarts from the top, the confirming scan sees an empty table
                cursor = page.last_evaluated_key
        except Exception as e:
            logger.error(
                f'Delete all failed after {pages_scanned} pages '
                f'and {items_deleted} deletes: {str(e)}'
            )
            return SweepResult.failed(e, pages_scanned, items_deleted)

        logger.info('Finished delete all')
        return SweepResult.ok(pages_scanned, items_deleted)
