# storefront/domain/errors.py


class ShopError(Exception):
    """Base for errors a request can end with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(ShopError):
    status_code = 400


class Unauthorized(ShopError):
    status_code = 401


class PermissionDenied(ShopError):
    status_code = 403


class NotFound(ShopError):
    status_code = 404


class Conflict(ShopError):
    status_code = 409


class StoreFailure(ShopError):
    """
    The data-access call itself failed. The message is safe to return;
    the underlying driver error is only logged.
    """

    status_code = 500


class ExternalServiceError(ShopError):
    """Auth provider or mail API answered negatively."""

    status_code = 500
