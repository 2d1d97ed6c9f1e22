# In src/certificate_checker/schemas.py

from typing import Any, TypedDict

import pydantic
from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import InvocationContextError

# --- Static Type Hinting (for mypy and IDEs) ---


class ContextLogKeys(TypedDict):
    """The per-invocation keys appended to every log record."""

    function_name: str | None
    function_memory_size: int | None
    function_arn: str | None
    function_request_id: str


# --- Runtime Validation (using Pydantic) ---

_CONTEXT_FIELDS = (
    "aws_request_id",
    "function_name",
    "function_version",
    "invoked_function_arn",
    "memory_limit_in_mb",
    "log_group_name",
    "log_stream_name",
)


def _read_context_attribute(context: Any, name: str) -> Any:
    """getattr that also converts failures raised inside the runtime object."""
    try:
        return getattr(context, name, None)
    except Exception as e:
        raise InvocationContextError(
            f"reading {name} raised {type(e).__name__}",
            context_type=type(context).__name__,
        ) from e


class InvocationContext(BaseModel):
    """
    Read-only snapshot of the runtime-supplied LambdaContext.

    Every field is optional so that a partial or missing context still
    produces a usable (if empty) snapshot.
    """

    model_config = ConfigDict(frozen=True)

    aws_request_id: str = ""
    function_name: str | None = None
    function_version: str | None = None
    invoked_function_arn: str | None = None
    memory_limit_in_mb: int | None = None
    log_group_name: str | None = None
    log_stream_name: str | None = None

    @field_validator("aws_request_id", mode="before")
    @classmethod
    def normalize_missing_request_id(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_lambda_context(cls, context: Any) -> "InvocationContext":
        """
        Builds a snapshot from any object exposing LambdaContext attributes.
        Missing attributes fall back to their defaults; attributes of the
        wrong type, or attributes whose access raises, raise
        InvocationContextError.
        """
        if context is None:
            return cls()

        raw = {name: _read_context_attribute(context, name) for name in _CONTEXT_FIELDS}
        try:
            return cls.model_validate(raw)
        except pydantic.ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise InvocationContextError(
                f"invalid attributes: {', '.join(fields)}",
                context_type=type(context).__name__,
            ) from e

    @classmethod
    def from_request_id_only(cls, context: Any) -> "InvocationContext":
        """
        Snapshot holding only the request id, read on its own so that broken
        metadata never hides it. Never raises; an unusable id becomes "".
        """
        try:
            return cls(aws_request_id=_read_context_attribute(context, "aws_request_id"))
        except (InvocationContextError, pydantic.ValidationError):
            return cls()

    def log_keys(self) -> ContextLogKeys:
        return {
            "function_name": self.function_name,
            "function_memory_size": self.memory_limit_in_mb,
            "function_arn": self.invoked_function_arn,
            "function_request_id": self.aws_request_id,
        }
