"""Integration failures raised around the external collaborators.

Input problems are reported with protean's ValidationError; the classes here
cover what goes wrong after validation, when talking to the order store or
the media library. None of them is fatal: each one is handled at the API
boundary.
"""


class StoreError(Exception):
    """A collaborator call failed at the transport level or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UploadFailure(StoreError):
    """An image upload did not produce a usable URL."""


class SubmissionFailure(Exception):
    """Order creation failed after validation; the cart is left untouched."""

    def __init__(self, message: str, uploaded_image_url: str | None = None) -> None:
        super().__init__(message)
        self.uploaded_image_url = uploaded_image_url


class StatusUpdateFailure(Exception):
    """The order store rejected or failed a status change."""


class OrderNotFound(Exception):
    """No order matches the given order number or id."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Order {key} not found")
        self.key = key
