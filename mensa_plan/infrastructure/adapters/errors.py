"""
Adapter Error Types

Transport and decoding failures for the meal plan API.
Samples of upstream payloads are truncated before being attached.
"""
from mensa_plan.domain.errors import MensaError

SAMPLE_LIMIT = 500


class TransportError(MensaError):
    """Request did not yield a usable response body."""
    pass


class RequestFailed(TransportError):
    """
    Network call could not complete.

    Raised for DNS, connection and timeout failures at the transport layer.
    """

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class UnexpectedStatus(TransportError):
    """Response status was not 200 OK."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"unexpected status code: {status_code}")
        self.status_code = status_code
        self.body = body[:SAMPLE_LIMIT] if body else ""


class DecodeError(MensaError):
    """Response body could not be decoded into a plan."""
    pass


class MalformedDocument(DecodeError):
    """Body is not well-formed XML."""

    def __init__(self, message: str, xml_sample: str = ""):
        super().__init__(message)
        self.xml_sample = xml_sample[:SAMPLE_LIMIT] if xml_sample else ""


class SchemaMismatch(DecodeError):
    """
    A mandatory element or attribute is missing or has the wrong shape.

    `path` locates the offending node, e.g. "plan/ort/tagesplan[1]/menue[2]".
    """

    def __init__(self, message: str, path: str = ""):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
