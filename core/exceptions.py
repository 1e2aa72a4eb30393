"""
Chyby JSON API.

View funkce je vyhazují a ``core.api.api_view`` z nich dělá JSON odpovědi
tvaru ``{"error": zpráva, "details": ...}``. Cokoli, co není ``ApiError``,
se zaloguje a volající dostane jen obecnou chybu 500.
"""


class ApiError(Exception):
    status = 500
    message = "Internal server error"

    def __init__(self, message=None, details=None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def payload(self):
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationFailed(ApiError):
    """Chybný nebo nepovolený vstup; ``details`` nese chyby polí."""
    status = 400
    message = "Validation error"

    @classmethod
    def from_form(cls, form):
        return cls(details=form.errors.get_json_data())


class BadRequest(ApiError):
    status = 400
    message = "Bad request"


class Unauthorized(ApiError):
    status = 401
    message = "Unauthorized"


class Forbidden(ApiError):
    status = 403
    message = "Forbidden"


class NotFound(ApiError):
    """
    Neexistující objekt, nebo objekt, který volající nesmí vidět.

    Soukromé kvízy se hlásí stejně jako neexistující, aby se neprozradilo,
    že existují.
    """
    status = 404

    def __init__(self, resource="Resource", details=None):
        super().__init__(f"{resource} not found", details)


class MethodNotAllowed(ApiError):
    status = 405
    message = "Method not allowed"


class TooManyRequests(ApiError):
    status = 429
    message = "Too many requests"

    def __init__(self, retry_after=None):
        self.retry_after = retry_after
        super().__init__("Too many requests")

    def payload(self):
        body = super().payload()
        body["message"] = "Rate limit exceeded. Please try again later."
        if self.retry_after is not None:
            body["retryAfter"] = self.retry_after
        return body
