"""
Standin Faults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- STORAGE faults (collection store, fixtures)
- REGISTRY faults (schema registration and lookup)
- MODEL faults (model instances and associations)
"""

from typing import Any, Optional

from .core import Fault, FaultDomain, Severity


# ============================================================================
# STORAGE Faults
# ============================================================================

class StorageFault(Fault):
    """Base class for collection store faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.STORAGE,
            severity=severity,
            retryable=False,
            metadata=metadata,
        )


class UnknownCollectionFault(StorageFault):
    """A lookup referenced a collection that was never created or seeded."""

    def __init__(self, collection: str, **kwargs):
        super().__init__(
            code="UNKNOWN_COLLECTION",
            message=(
                f"Collection '{collection}' does not exist. Create it with "
                f"create_collection() or seed it with load_data()"
            ),
            metadata={"collection": collection, **kwargs.get("metadata", {})},
        )
        self.collection = collection


class DuplicateIdentifierFault(StorageFault):
    """A record was inserted with an id already present in its collection."""

    def __init__(self, collection: str, record_id: Any, **kwargs):
        super().__init__(
            code="DUPLICATE_IDENTIFIER",
            message=f"Collection '{collection}' already holds a record with id {record_id!r}",
            metadata={"collection": collection, "id": record_id, **kwargs.get("metadata", {})},
        )


class FixtureFault(StorageFault):
    """A fixture file could not be turned into seed data."""

    def __init__(self, path: str, reason: str, **kwargs):
        super().__init__(
            code="FIXTURE_INVALID",
            message=f"Fixture '{path}' is invalid: {reason}",
            severity=Severity.FATAL,
            metadata={"path": path, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# REGISTRY Faults
# ============================================================================

class RegistryFault(Fault):
    """Base class for schema registry faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.REGISTRY,
            severity=severity,
            retryable=False,
            metadata=metadata,
        )


class UnknownModelFault(RegistryFault):
    """Model type name not registered with the schema."""

    def __init__(self, model_name: str, **kwargs):
        super().__init__(
            code="UNKNOWN_MODEL",
            message=f"Model '{model_name}' is not registered with the schema",
            severity=Severity.ERROR,
            metadata={"model": model_name, **kwargs.get("metadata", {})},
        )
        self.model_name = model_name


class DuplicateRegistrationFault(RegistryFault):
    """The same model type name was registered twice."""

    def __init__(self, model_name: str, **kwargs):
        super().__init__(
            code="DUPLICATE_REGISTRATION",
            message=f"Model '{model_name}' is already registered",
            metadata={"model": model_name, **kwargs.get("metadata", {})},
        )


class ModelRegistrationFault(RegistryFault):
    """Model registration failed."""

    def __init__(self, model_name: str, reason: str, **kwargs):
        super().__init__(
            code="MODEL_REGISTRATION_FAILED",
            message=f"Failed to register model '{model_name}': {reason}",
            metadata={"model": model_name, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# MODEL Faults
# ============================================================================

class ModelFault(Fault):
    """Base class for model instance faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.MODEL,
            severity=severity,
            retryable=False,
            metadata=metadata,
        )


class InvalidIdentifierMutationFault(ModelFault):
    """An attempt was made to change the id of a saved record."""

    def __init__(self, model: str, current: Any, requested: Any, **kwargs):
        super().__init__(
            code="INVALID_ID_MUTATION",
            message=f"Cannot change id of saved {model} from {current!r} to {requested!r}",
            metadata={
                "model": model,
                "current": current,
                "requested": requested,
                **kwargs.get("metadata", {}),
            },
        )


class RecordNotFoundFault(ModelFault):
    """The record backing an operation is missing from its collection."""

    def __init__(self, model: str, record_id: Any, reason: str = "record not found", **kwargs):
        super().__init__(
            code="RECORD_NOT_FOUND",
            message=f"{model} {record_id!r}: {reason}",
            metadata={
                "model": model,
                "id": record_id,
                "reason": reason,
                **kwargs.get("metadata", {}),
            },
        )


class AssociationFault(ModelFault):
    """An association accessor received a value it cannot hold."""

    def __init__(self, model: str, association: str, reason: str, **kwargs):
        super().__init__(
            code="ASSOCIATION_INVALID",
            message=f"{model}.{association}: {reason}",
            metadata={
                "model": model,
                "association": association,
                "reason": reason,
                **kwargs.get("metadata", {}),
            },
        )
