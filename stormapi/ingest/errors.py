"""Upstream failure type shared by every outbound client."""


class UpstreamError(Exception):
    """Raised when a dependent service call fails.

    Covers network errors, timeouts, non-success statuses and bodies that are
    not the JSON shape we expect. The message names the service and status
    only; request URLs are never included since some carry API keys.
    """

    def __init__(self, service: str, message: str, status_code: int | None = None):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.status_code = status_code
