"""
Handler decorators for error handling, logging, and response formatting.
"""
import functools
import json
import uuid
from decimal import Decimal
from typing import Callable, Any, Dict, Optional
from logger_config import get_logger
from utils.exceptions import ItemNotFoundError, ValidationError, serialize_error

logger = get_logger(__name__)


def json_default(value: Any) -> Any:
    """
    JSON fallback for values returned by the boto3 resource layer.

    DynamoDB numbers carry up to 38 digits. Fractional values that a float
    cannot hold exactly are rendered as strings.
    """
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        as_float = float(value)
        if Decimal(repr(as_float)) == value:
            return as_float
        return str(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


def api_response(status_code: int, body: Optional[Any] = None) -> Dict[str, Any]:
    """
    Build an API Gateway proxy response.

    Strings are passed through as the body, anything else is JSON encoded.
    """
    if body is None:
        body = ''
    elif not isinstance(body, str):
        body = json.dumps(body, default=json_default)
    return {'statusCode': status_code, 'body': body}


def error_body(error: BaseException) -> str:
    """Serialize an exception for a 500 response body."""
    return json.dumps(serialize_error(error), default=json_default)


def api_handler(
    func: Callable[[Any, Any], Dict[str, Any]]
) -> Callable[[Any, Any], Dict[str, Any]]:
    """
    Decorator for API Gateway proxy handlers.

    Provides:
    - Request correlation IDs for logging
    - ValidationError -> 400 with the message as body
    - ItemNotFoundError -> 404 with an empty body
    - Any other exception -> 500 with the serialized error as body

    Args:
        func: The handler function to decorate

    Returns:
        Decorated handler function
    """
    @functools.wraps(func)
    def wrapper(event: Any, context: Any) -> Dict[str, Any]:
        log_context = {
            "correlation_id": str(uuid.uuid4()),
            "request_id": getattr(context, "aws_request_id", None) if context else None,
        }

        logger.info(f"Handler {func.__name__} invoked", extra=log_context)

        try:
            response = func(event or {}, context)

        except ValidationError as e:
            logger.warning(
                f"Handler {func.__name__} validation error: {e.message}",
                extra=log_context
            )
            return api_response(400, e.message)

        except ItemNotFoundError as e:
            logger.info(
                f"Handler {func.__name__}: {e.message}",
                extra=log_context
            )
            return api_response(404)

        except Exception as e:
            logger.error(
                f"Handler {func.__name__} failed: {str(e)}",
                extra=log_context,
                exc_info=True
            )
            return api_response(500, error_body(e))

        logger.info(
            f"Handler {func.__name__} completed with status {response.get('statusCode')}",
            extra=log_context
        )
        return response

    return wrapper
