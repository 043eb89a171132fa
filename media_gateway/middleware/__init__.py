"""HTTP middleware: request size limit, request ID, security headers.

Applied in main app; order matters (last added = outermost).
Import and use from media_gateway.main.
"""

from media_gateway.middleware.request_id import RequestIDMiddleware
from media_gateway.middleware.request_size_limit import RequestSizeLimitMiddleware
from media_gateway.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
]
