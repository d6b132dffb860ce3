class APIError(Exception):
    def __init__(self, code: str, message: str, http_status: int = 400, details: dict = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details


class ValidationError(APIError):
    def __init__(self, message: str, details: dict = None):
        super().__init__("INVALID_INPUT", message, 400, details)


class NotFoundError(APIError):
    def __init__(self, message: str, details: dict = None):
        super().__init__("NOT_FOUND", message, 404, details)


class RateLimitError(APIError):
    def __init__(self, message: str, details: dict = None):
        super().__init__("RATE_LIMITED", message, 429, details)


class ServiceUnavailableError(APIError):
    def __init__(self, message: str, details: dict = None):
        super().__init__("SERVICE_UNAVAILABLE", message, 503, details)


class NotImplementedFeatureError(APIError):
    def __init__(self, message: str, details: dict = None):
        super().__init__("NOT_IMPLEMENTED", message, 501, details)
