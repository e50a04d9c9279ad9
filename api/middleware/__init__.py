from .request_id import RequestIDMiddleware, get_request_id
from .logging import LoggingMiddleware
from .cors import PermissiveCORSMiddleware

__all__ = [
    "RequestIDMiddleware",
    "LoggingMiddleware",
    "PermissiveCORSMiddleware",
    "get_request_id",
]
