"""
Shared pytest fixtures.

DynamoDB is mocked in-process with moto, no AWS account is needed.
"""
import os

import boto3
import pytest
from moto import mock_aws

TABLE_NAME = 'items'
PRIMARY_KEY = 'itemId'
REGION = 'us-east-1'


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Fake credentials and table settings, plus fresh process-wide caches."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', REGION)
    monkeypatch.setenv('AWS_REGION', REGION)
    monkeypatch.setenv('TABLE_NAME', TABLE_NAME)
    monkeypatch.setenv('PRIMARY_KEY', PRIMARY_KEY)
    monkeypatch.delenv('LOG_LEVEL', raising=False)
    monkeypatch.delenv('MAX_SWEEP_PAGES', raising=False)

    import config
    import handler
    config._config = None
    handler._items_store = None
    yield
    config._config = None
    handler._items_store = None


@pytest.fixture
def mock_context():
    """Mock Lambda context."""
    class MockContext:
        def __init__(self):
            self.function_name = 'test-function'
            self.memory_limit_in_mb = 128
            self.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:test'
            self.aws_request_id = 'test-request-id'

    return MockContext()


@pytest.fixture
def items_table():
    """Create the items table inside a moto mock."""
    with mock_aws():
        dynamodb = boto3.resource('dynamodb', region_name=REGION)
        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            AttributeDefinitions=[
                {'AttributeName': PRIMARY_KEY, 'AttributeType': 'S'}
            ],
            KeySchema=[
                {'AttributeName': PRIMARY_KEY, 'KeyType': 'HASH'}
            ],
            BillingMode='PAY_PER_REQUEST'
        )
        yield table


def put_items(table, count, prefix='item'):
    """Seed the table with simple items and return their keys."""
    keys = [f'{prefix}-{idx}' for idx in range(count)]
    for key in keys:
        table.put_item(Item={PRIMARY_KEY: key, 'name': key})
    return keys
