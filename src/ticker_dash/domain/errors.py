from __future__ import annotations

from typing import Any


class TickerError(RuntimeError):
    """Base exception for ticker errors."""


class DecodeError(TickerError, ValueError):
    """Raised when a provider numeric series has an unexpected shape."""


class QuoteError(TickerError):
    """Raised when a quote for a single symbol cannot be produced."""

    def __init__(self, symbol: str, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.symbol = symbol
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.symbol}: {self.message} ({self.detail})"
        return f"{self.symbol}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        cause = self.__cause__
        return {
            "kind": type(self).__name__,
            "symbol": self.symbol,
            "message": self.message,
            "detail": self.detail or "",
            "source": str(cause) if cause is not None else "",
        }


class HttpError(QuoteError):
    """Raised on connection failures, timeouts and non-200 responses."""


class ParseFailure(QuoteError):
    """Raised when the response body is not the expected chart envelope."""


class MissingData(QuoteError):
    """Raised when the provider answers with an error payload."""


class UnknownError(TickerError):
    """Raised for failures that fit no other category."""


class TerminalError(TickerError):
    """Raised when the terminal cannot be switched into or out of dashboard mode."""
