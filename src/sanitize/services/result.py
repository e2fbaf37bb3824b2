"""ServiceResult — what every RuleService operation returns to the CLI.

Services never raise for expected failures (unknown target, bad JSON,
unsupported rule, failing transformer); they return a failed result whose
``error.code`` is the machine-readable reason. Engine errors keep their
own ``SanitizeError.code``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field, model_validator

from sanitize.domain.errors import SanitizeError


class ServiceError(BaseModel):
    """Why an operation failed."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation (``rules``, ``parse`` or ``apply``).

    A successful result never carries an error; a failed one always does.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @model_validator(mode="after")
    def _error_matches_outcome(self) -> ServiceResult:
        if self.ok and self.error is not None:
            msg = "a successful result cannot carry an error"
            raise ValueError(msg)
        if not self.ok and self.error is None:
            msg = "a failed result needs an error"
            raise ValueError(msg)
        return self

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any] | None = None, *, warnings: Iterable[str] = ()
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, warnings=list(warnings))

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )

    @classmethod
    def from_error(cls, op: str, exc: SanitizeError) -> ServiceResult:
        """Fail with the error's own code; its public string attributes become detail.

        ``UnsupportedRuleError`` yields ``{"rule": ..., "field": ...}``.
        """
        detail = {
            key: value
            for key, value in vars(exc).items()
            if not key.startswith("_") and isinstance(value, str)
        }
        return cls.failure(op, exc.code, str(exc), **detail)
