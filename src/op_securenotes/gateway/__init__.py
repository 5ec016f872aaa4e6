"""Remote item gateway: the ``op`` CLI and pending request tracking."""

from op_securenotes.gateway.base import BaseGateway
from op_securenotes.gateway.op import OpGateway
from op_securenotes.gateway.requests import CompletionCallback, RequestTracker

__all__ = [
    "BaseGateway",
    "CompletionCallback",
    "OpGateway",
    "RequestTracker",
]
