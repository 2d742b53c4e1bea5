"""Domain errors raised by services and translated to HTTP responses by routers."""

from typing import Any


class StorefrontError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(StorefrontError):
    status_code = 404


class ProductNotFoundError(NotFoundError):
    def __init__(self, identifier: str | None = None) -> None:
        super().__init__("Product not found", details={"id": identifier} if identifier else None)


class BannerNotFoundError(NotFoundError):
    def __init__(self, banner_id: str) -> None:
        super().__init__("Banner not found", details={"id": banner_id})


class ContentNotFoundError(NotFoundError):
    pass


class InvalidRequestError(StorefrontError):
    status_code = 400


class DuplicateHandleError(InvalidRequestError):
    def __init__(self, kind: str, handle: str) -> None:
        super().__init__(f'{kind} with handle "{handle}" already exists')
        self.handle = handle


class ExternalServiceError(StorefrontError):
    """A call to Sanity or Shopify failed."""

    service = "external"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message, details=details)
        self.upstream_status = status_code


class IntegrationNotConfiguredError(ExternalServiceError):
    def __init__(self, service: str) -> None:
        super().__init__(f"{service} integration is not configured")
        self.service = service


class SanityAPIError(ExternalServiceError):
    service = "sanity"


class ShopifyAPIError(ExternalServiceError):
    service = "shopify"
