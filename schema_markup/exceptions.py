"""
Error taxonomy for the extraction pipeline.

Parse and plausibility failures of JSON-LD content are not exceptions: they are
recorded on validation verdicts (see ValidationErrorType).
"""
from typing import Optional


class ExtractionError(Exception):
    """Base class for errors that abort an extraction request."""
    
    details: Optional[str] = None
    
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if details is not None:
            self.details = details


class InvalidInputError(ExtractionError):
    """Missing or malformed URL or type list."""


class FetchError(ExtractionError):
    """The page could not be retrieved (HTTP status or transport failure)."""
    
    details = "The website may be blocking automated requests or be temporarily unavailable"
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.url = url


class FetchTimeoutError(FetchError):
    """The request did not complete within the configured timeout."""
