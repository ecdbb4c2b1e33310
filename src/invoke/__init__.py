"""
Invocation layer: maps named function calls from the host onto `RecordStore`.
"""

from .handler import InvocationError, invoke, lambda_handler

__all__ = ["InvocationError", "invoke", "lambda_handler"]
