"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class ChainCLIError(Exception):
    """Base exception for chain-cli."""

    exit_code: int = 1


class TransportError(ChainCLIError):
    """The request could not be sent or the connection failed."""

    exit_code = 2


class AuthenticationError(ChainCLIError):
    """Authentication failed (401/403)."""

    exit_code = 3


class NotFoundError(ChainCLIError):
    """Resource not found (404)."""

    exit_code = 4


class ConflictError(ChainCLIError):
    """Resource conflict (409)."""

    exit_code = 5


class ConfigurationError(ChainCLIError):
    """No usable backend configuration."""

    exit_code = 6


class ValidationError(ChainCLIError):
    """Missing or malformed input, or a 422 from the backend."""

    exit_code = 7

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or "Validation error")


class DecodeError(ChainCLIError):
    """Response body does not match the expected document shape."""

    exit_code = 8


class AggregatedError(ChainCLIError):
    """Several failures reported as one, none of them discarded.

    Nested aggregates are flattened so ``errors`` always holds the leaf causes
    in the order they happened.
    """

    exit_code = 9

    def __init__(self, *errors: BaseException) -> None:
        flat: list[BaseException] = []
        for err in errors:
            if isinstance(err, AggregatedError):
                flat.extend(err.errors)
            else:
                flat.append(err)
        self.errors = flat
        super().__init__("; ".join(str(e) or type(e).__name__ for e in flat))


class BackendAPIError(ChainCLIError):
    """Generic API error from the backend."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        super().__init__(f"Backend returned {status_code}: {detail}")


def error_handler(func: F) -> F:
    """Decorator that catches ChainCLIError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ChainCLIError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}", soft_wrap=True)
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}", soft_wrap=True)
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
