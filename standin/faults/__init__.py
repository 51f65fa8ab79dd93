"""
Standin Faults - Structured error handling for the data layer.

Errors raised by the store, the schema and model instances are typed
fault objects carrying a stable code, a domain and a severity, so tests
and tooling can match on them instead of parsing messages.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain enumeration
- Severity: Severity levels
- Domain faults for the storage, registry and model domains
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    StorageFault,
    UnknownCollectionFault,
    DuplicateIdentifierFault,
    FixtureFault,
    RegistryFault,
    UnknownModelFault,
    DuplicateRegistrationFault,
    ModelRegistrationFault,
    ModelFault,
    InvalidIdentifierMutationFault,
    RecordNotFoundFault,
    AssociationFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Storage
    "StorageFault",
    "UnknownCollectionFault",
    "DuplicateIdentifierFault",
    "FixtureFault",

    # Registry
    "RegistryFault",
    "UnknownModelFault",
    "DuplicateRegistrationFault",
    "ModelRegistrationFault",

    # Model
    "ModelFault",
    "InvalidIdentifierMutationFault",
    "RecordNotFoundFault",
    "AssociationFault",
]
