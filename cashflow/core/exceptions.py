from __future__ import annotations


class CashFlowError(Exception):
    """Base class for errors raised by the cash flow service."""


class ManualEntryNotFoundError(CashFlowError):
    """Raised when a manual cash entry id does not exist."""

    def __init__(self, entry_id: object):
        super().__init__(f"Manual cash entry not found with ID: {entry_id}")
        self.entry_id = entry_id


class InvalidInputError(CashFlowError):
    """Raised for caller errors: bad amounts, blank descriptions, bad ranges."""


class UpstreamUnavailableError(CashFlowError):
    """Raised by a gateway when an upstream summary service cannot be used."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message
