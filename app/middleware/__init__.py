"""
Middleware components for request processing:
request context (request ID, client IP) and CORS.
"""

from app.middleware.cors import CORSMiddleware
from app.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware", "CORSMiddleware"]
