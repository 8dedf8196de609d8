"""HTTP middleware: timeout, request ID, security headers, scoped CORS.

Applied in main app; order matters (last added = outermost).
Import and use from question_bank.main.
"""

from question_bank.middleware.cors import ScopedCORSMiddleware
from question_bank.middleware.request_id import RequestIDMiddleware
from question_bank.middleware.security_headers import SecurityHeadersMiddleware
from question_bank.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "ScopedCORSMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
