from dataclasses import dataclass


@dataclass(frozen=True)
class ScorebookError:
    message: str


@dataclass(frozen=True)
class ValidationError(ScorebookError):
    field: str


@dataclass(frozen=True)
class TransportError(ScorebookError):
    url: str
    status_code: int | None = None


@dataclass(frozen=True)
class DuplicateRequestError(ScorebookError):
    request_key: str


@dataclass(frozen=True)
class SessionClosedError(ScorebookError):
    state: str
