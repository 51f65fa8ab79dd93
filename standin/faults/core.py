"""
Standin Faults - Core types.

Every error the data layer raises is a ``Fault``: an exception that also
carries a stable code, the domain it came from and a severity.

    try:
        schema.wizard.find(1)
    except Fault as fault:
        fault.code            # "UNKNOWN_MODEL"
        fault.domain.value    # "registry"
        fault.to_dict()

Nothing here talks to a network or a disk after startup, so no fault is
ever retryable.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    """How bad a fault is; drives the log level tooling reports it at."""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain:
    """
    Functional area a fault belongs to.

    Each domain names the severity its faults get when they do not pick
    one themselves. Domains compare by name, also against plain strings.
    """

    def __init__(self, name: str, description: str = "", severity: Severity = Severity.ERROR):
        self.name = name
        self.description = description
        self.severity = severity

    @property
    def value(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain({self.name!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return self.name == other

    def __hash__(self) -> int:
        return hash(self.name)


# Setup problems stop a test run; lookups and writes fail one call.
FaultDomain.CONFIG = FaultDomain("config", "Settings files and environment", Severity.FATAL)
FaultDomain.REGISTRY = FaultDomain("registry", "Model registration and lookup", Severity.FATAL)
FaultDomain.STORAGE = FaultDomain("storage", "Collections, records and fixtures")
FaultDomain.MODEL = FaultDomain("model", "Model instances and associations")


class Fault(Exception):
    """
    Base class for typed faults.

    Subclasses usually fix ``code`` and ``domain`` and build the message
    from their arguments; ``Fault`` itself can be raised directly:

        raise Fault(code="SEED_MISSING", message="no users", domain=FaultDomain.STORAGE)

    Attributes:
        code: Stable machine-readable identifier
        message: Human-readable summary
        domain: The ``FaultDomain`` raising it
        severity: Defaults to the domain's severity
        retryable: Always False unless a caller says otherwise
        metadata: Context for logs and assertions
    """

    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        domain: FaultDomain | None = None,
        severity: Optional[Severity] = None,
        retryable: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        self.code = code if code is not None else getattr(self, "code", None)
        self.message = message if message is not None else getattr(self, "message", None)
        self.domain = domain if domain is not None else getattr(self, "domain", None)

        if self.code is None or self.message is None or self.domain is None:
            raise TypeError(f"{type(self).__name__} needs a code, a message and a domain")

        super().__init__(self.message)
        self.severity = severity or self.domain.severity
        self.retryable = retryable
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, domain={self.domain.value!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form for logs and JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "metadata": self.metadata,
        }
