"""
Shared helpers for Lambda handlers: response decorators and exceptions.
"""
