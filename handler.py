"""
Lambda handler functions for the items REST API.

Each entry point is wired to one API Gateway route. The DynamoDB store is
built once per process and handed to the plain request functions, which
take it as an argument so they can run against any store.
"""
import json
import uuid
from decimal import Decimal
from typing import Any, Dict, Optional
from logger_config import get_logger
from config import get_config
from services.dynamodb_service import DynamoDBService
from services.bulk_delete_service import BulkDeleteSweeper
from utils.decorators import api_handler, api_response, error_body
from utils.exceptions import (
    ItemNotFoundError,
    StoreUnavailableError,
    ValidationError,
)

logger = get_logger(__name__)

MISSING_BODY = 'invalid request, you are missing the parameter body'
MISSING_ID = 'invalid request, you are missing the path parameter id'
MISSING_ID_GET = 'Error: You are missing the path parameter id'
NO_ARGUMENTS = 'invalid request, no arguments provided'
RESERVED_RESPONSE = "Error: You're using AWS reserved keywords as attributes"
DYNAMODB_EXECUTION_ERROR = (
    'Error: Execution update, caused a Dynamodb error, '
    'please take a look at your CloudWatch Logs.'
)

_items_store: Optional[DynamoDBService] = None


def get_items_store() -> DynamoDBService:
    """Get the process-wide store bound to the configured table."""
    global _items_store
    if _items_store is None:
        config = get_config()
        _items_store = DynamoDBService(
            config.table_name,
            config.primary_key,
            region_name=config.aws_region
        )
    return _items_store


def _path_id(event: Dict[str, Any], message: str) -> str:
    item_id = (event.get('pathParameters') or {}).get('id')
    if not item_id:
        raise ValidationError(message, field='id')
    return item_id


def _json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """Parse the request body into a dict. Floats become Decimal for DynamoDB."""
    body = event.get('body')
    if body is None or body == '':
        raise ValidationError(MISSING_BODY, field='body')

    if isinstance(body, str):
        try:
            body = json.loads(body, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f'invalid request, body is not valid JSON: {e.msg}',
                field='body',
                value=body
            )

    if not isinstance(body, dict):
        raise ValidationError(
            'invalid request, body must be a JSON object', field='body', value=body
        )
    return body


def _write_error_response(error: StoreUnavailableError) -> Dict[str, Any]:
    if error.code == 'ValidationException' and 'reserved keyword' in error.message:
        return api_response(500, RESERVED_RESPONSE)
    return api_response(500, DYNAMODB_EXECUTION_ERROR)


def list_items(store: DynamoDBService) -> Dict[str, Any]:
    return api_response(200, store.scan_all())


def read_item(store: DynamoDBService, event: Dict[str, Any]) -> Dict[str, Any]:
    item_id = _path_id(event, MISSING_ID_GET)
    item = store.get_item(item_id)
    if not item:
        raise ItemNotFoundError(f'Item {item_id} not found', item_id=item_id)
    return api_response(200, item)


def add_item(store: DynamoDBService, event: Dict[str, Any]) -> Dict[str, Any]:
    item = dict(_json_body(event))
    # Keys are always server-assigned
    item[store.primary_key] = str(uuid.uuid4())

    try:
        store.put_item(item)
    except StoreUnavailableError as e:
        return _write_error_response(e)
    return api_response(201)


def edit_item(store: DynamoDBService, event: Dict[str, Any]) -> Dict[str, Any]:
    attributes = _json_body(event)
    item_id = _path_id(event, MISSING_ID)
    if not attributes:
        raise ValidationError(NO_ARGUMENTS)
    if store.primary_key in attributes:
        raise ValidationError(
            f'invalid request, {store.primary_key} cannot be updated',
            field=store.primary_key
        )

    try:
        store.update_item(item_id, attributes)
    except StoreUnavailableError as e:
        return _write_error_response(e)
    return api_response(204)


def remove_item(store: DynamoDBService, event: Dict[str, Any]) -> Dict[str, Any]:
    item_id = _path_id(event, MISSING_ID)
    store.delete_item(item_id)
    return api_response(200)


def remove_all_items(
    store: DynamoDBService,
    max_pages: Optional[int] = None
) -> Dict[str, Any]:
    result = BulkDeleteSweeper(store, max_pages=max_pages).sweep()
    if not result.success:
        return api_response(500, error_body(result.error))
    logger.info(
        f'Deleted {result.items_deleted} items in {result.pages_scanned} scans'
    )
    return api_response(200)


@api_handler
def get_all_items(event, context):
    """GET /items"""
    return list_items(get_items_store())


@api_handler
def get_one_item(event, context):
    """GET /items/{id}"""
    return read_item(get_items_store(), event)


@api_handler
def create_item(event, context):
    """POST /items"""
    return add_item(get_items_store(), event)


@api_handler
def update_item(event, context):
    """PATCH /items/{id}"""
    return edit_item(get_items_store(), event)


@api_handler
def delete_item(event, context):
    """DELETE /items/{id}"""
    return remove_item(get_items_store(), event)


@api_handler
def delete_all_items(event, context):
    """Drain the whole table. Takes no request arguments."""
    return remove_all_items(
        get_items_store(), max_pages=get_config().max_sweep_pages
    )
