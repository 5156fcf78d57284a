"""Error codes and the exception taxonomy shared by the resolver scripts."""

from __future__ import annotations

from typing import Iterable

ERR_INTERNAL = "INTERNAL_ERROR"
ERR_FETCH_FAILED = "FETCH_FAILED"
ERR_UNKNOWN_CONTRACT = "UNKNOWN_CONTRACT"
ERR_MISSING_EXPORT = "MISSING_EXPORT"
ERR_UNKNOWN_FRAGMENT = "UNKNOWN_FRAGMENT"
ERR_UNKNOWN_NETWORK = "UNKNOWN_NETWORK"
ERR_UNKNOWN_CONTRACT_ROLE = "UNKNOWN_CONTRACT_ROLE"
ERR_UNKNOWN_TOKEN = "UNKNOWN_TOKEN"
ERR_MALFORMED_INPUT = "MALFORMED_INPUT"
ERR_UPSTREAM_HTTP = "UPSTREAM_HTTP_ERROR"


class ResolverError(Exception):
    """Terminal failure of a single resolver command.

    ``message`` becomes the ``Error:`` line, ``hint`` an optional remediation
    line and ``details`` any extra context lines (URLs, underlying errors).
    """

    code = ERR_INTERNAL

    def __init__(self, message: str, *, hint: str | None = None, details: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = list(details)

    def as_lines(self) -> list[str]:
        lines = [f"Error: {self.message}"]
        lines.extend(self.details)
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        return lines


class FetchFailure(ResolverError):
    code = ERR_FETCH_FAILED


class UnknownContract(ResolverError):
    code = ERR_UNKNOWN_CONTRACT


class MissingExport(ResolverError):
    code = ERR_MISSING_EXPORT


class UnknownFragment(ResolverError):
    code = ERR_UNKNOWN_FRAGMENT


class UnknownNetwork(ResolverError):
    code = ERR_UNKNOWN_NETWORK


class UnknownContractRole(ResolverError):
    code = ERR_UNKNOWN_CONTRACT_ROLE


class UnknownToken(ResolverError):
    code = ERR_UNKNOWN_TOKEN


class MalformedInput(ResolverError):
    code = ERR_MALFORMED_INPUT


class UpstreamHttpError(ResolverError):
    code = ERR_UPSTREAM_HTTP
