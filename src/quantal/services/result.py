"""ServiceResult and ServiceError — the adapter contract.

INVARIANT: All service-layer methods return ServiceResult; engine
exceptions never cross this boundary. ``ServiceError.code`` keeps the
engine's failure kind so callers can tell an unknown unit from a
dimension mismatch.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"canonicalize"``).
        data: Quantity triple (``value``, ``unit``, ``system``) or
            ``comparison`` on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (input echo, catalog name).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def quantity(self) -> tuple[str, str, str] | None:
        """The result as a ``(value, unit, system)`` triple, if there is one."""
        if not self.ok or "value" not in self.data:
            return None
        return (self.data["value"], self.data["unit"], self.data["system"])
