from __future__ import annotations


class CateringError(Exception):
    """Base class for domain errors raised by services."""


class NotFoundError(CateringError, LookupError):
    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(CateringError, ValueError):
    def __init__(self, entity: str, current: str, new: str, role: str = "admin"):
        super().__init__(
            f"Invalid {entity} status transition from {current} to {new} (role={role})"
        )
        self.entity = entity
        self.current = current
        self.new = new
        self.role = role


class EstimateLockedError(CateringError):
    """Raised when an estimate is edited after it left the draft state."""


class PricingError(CateringError, ValueError):
    pass


class FunctionInvocationError(CateringError, RuntimeError):
    def __init__(self, function_name: str, message: str, status_code: int | None = None):
        super().__init__(f"{function_name}: {message}")
        self.function_name = function_name
        self.status_code = status_code


class ContractError(CateringError):
    """Raised when a contract cannot be produced for an estimate in its current state."""
