"""
Service layer for the items table.

Wraps DynamoDB access and the bulk delete sweep so handlers stay thin
request/response shims.
"""
