from .performance_middleware import PerformanceMiddleware
from .rate_limit_middleware import RateLimitMiddleware
from .request_id_middleware import RequestIDMiddleware

__all__ = ["PerformanceMiddleware", "RateLimitMiddleware", "RequestIDMiddleware"]
