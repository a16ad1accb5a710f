"""
DynamoDB service for item table operations.
"""
import boto3
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, TYPE_CHECKING
from botocore.exceptions import BotoCoreError, ClientError
from logger_config import get_logger
from utils.exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table
else:
    DynamoDBServiceResource = Any
    Table = Any

logger = get_logger(__name__)


@dataclass
class ScanPage:
    """One page of a table scan."""

    items: List[Dict[str, Any]] = field(default_factory=list)
    scanned_count: int = 0
    last_evaluated_key: Optional[Dict[str, Any]] = None
    # False when the response carried no Items collection at all
    has_items: bool = True


class DynamoDBService:
    """Service for DynamoDB operations on one table keyed by one attribute."""

    def __init__(
        self,
        table_name: str,
        primary_key: str,
        region_name: Optional[str] = None,
        page_size: Optional[int] = None,
        resource: Optional[DynamoDBServiceResource] = None
    ) -> None:
        """
        Initialize DynamoDB service.

        Args:
            table_name: Name of the DynamoDB table
            primary_key: Name of the partition key attribute
            region_name: AWS region for the lazily created resource
            page_size: Scan Limit per page (None lets DynamoDB decide)
            resource: Pre-built boto3 DynamoDB resource to reuse
        """
        self.table_name = table_name
        self.primary_key = primary_key
        self.region_name = region_name
        self.page_size = page_size
        self._resource = resource
        self._table: Optional[Table] = None

    @property
    def resource(self) -> DynamoDBServiceResource:
        """Lazy initialization of DynamoDB resource."""
        if self._resource is None:
            self._resource = boto3.resource('dynamodb', region_name=self.region_name)
        return self._resource

    @property
    def table(self) -> Table:
        """Lazy initialization of the bound Table."""
        if self._table is None:
            self._table = self.resource.Table(self.table_name)
        return self._table

    def _store_error(self, operation: str, error: Exception) -> StoreUnavailableError:
        code = None
        if isinstance(error, ClientError):
            code = error.response.get('Error', {}).get('Code')
        logger.error(f'DynamoDB {operation} failed for table {self.table_name}: {str(error)}')
        return StoreUnavailableError(
            str(error),
            code=code,
            operation=operation,
            table_name=self.table_name
        )

    def scan(self, exclusive_start_key: Optional[Dict[str, Any]] = None) -> ScanPage:
        """
        Scan one page of the table.

        Args:
            exclusive_start_key: Cursor from the previous page, None for the
                start of the table

        Returns:
            ScanPage with the items and the cursor for the next page

        Raises:
            StoreUnavailableError: If DynamoDB operation fails
        """
        scan_kwargs: Dict[str, Any] = {}
        if exclusive_start_key:
            scan_kwargs['ExclusiveStartKey'] = exclusive_start_key
        if self.page_size:
            scan_kwargs['Limit'] = self.page_size

        try:
            response = self.table.scan(**scan_kwargs)
        except (ClientError, BotoCoreError) as e:
            raise self._store_error('scan', e) from e

        return ScanPage(
            items=response.get('Items') or [],
            scanned_count=response.get('ScannedCount', 0),
            last_evaluated_key=response.get('LastEvaluatedKey'),
            has_items='Items' in response,
        )

    def scan_all(self) -> List[Dict[str, Any]]:
        """
        Read every item in the table, following scan cursors.

        Raises:
            StoreUnavailableError: If DynamoDB operation fails
        """
        items: List[Dict[str, Any]] = []
        page = self.scan()
        items.extend(page.items)
        while page.last_evaluated_key:
            page = self.scan(page.last_evaluated_key)
            items.extend(page.items)
        return items

    def get_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        """
        Get an item by primary key value.

        Returns:
            Item dictionary if found, None otherwise

        Raises:
            StoreUnavailableError: If DynamoDB operation fails
        """
        try:
            response = self.table.get_item(Key={self.primary_key: item_id})
        except (ClientError, BotoCoreError) as e:
            raise self._store_error('get_item', e) from e
        return response.get('Item')

    def put_item(self, item: Dict[str, Any]) -> None:
        """
        Put an item into the table.

        Raises:
            StoreUnavailableError: If DynamoDB operation fails
        """
        try:
            self.table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            raise self._store_error('put_item', e) from e
        logger.info(f'Successfully put item to DynamoDB table {self.table_name}')

    def update_item(self, item_id: Any, attributes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Set the given attributes on an item.

        Attribute names go through ExpressionAttributeNames so reserved
        words can be updated.

        Args:
            item_id: Primary key value of the item
            attributes: Attribute names and their new values

        Returns:
            The updated attributes as returned by DynamoDB

        Raises:
            StoreUnavailableError: If DynamoDB operation fails
        """
        names = {}
        values = {}
        assignments = []
        for idx, (name, value) in enumerate(attributes.items()):
            names[f'#a{idx}'] = name
            values[f':v{idx}'] = value
            assignments.append(f'#a{idx} = :v{idx}')

        try:
            response = self.table.update_item(
                Key={self.primary_key: item_id},
                UpdateExpression='SET ' + ', '.join(assignments),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues='UPDATED_NEW'
            )
        except (ClientError, BotoCoreError) as e:
            raise self._store_error('update_item', e) from e
        return response.get('Attributes', {})

    def delete_item(self, item_id: Any) -> None:
        """
        Delete an item by primary key value. Deleting a missing item is a no-op.

        Raises:
            StoreUnavailableError: If DynamoDB operation fails
        """
        try:
            self.table.delete_item(Key={self.primary_key: item_id})
        except (ClientError, BotoCoreError) as e:
            raise self._store_error('delete_item', e) from e
