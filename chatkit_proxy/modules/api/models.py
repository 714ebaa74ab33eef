"""
ChatKit proxy shared data models.

Request models are deliberately lenient: every field is optional, unknown
fields are ignored, and a field whose value has the wrong type reads as
None without affecting its siblings, since the browser widget owns the
body shape.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Request Models (API Input)


class LenientModel(BaseModel):
    """Base for request models: invalid field values become None."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="wrap")
    @classmethod
    def drop_invalid(cls, value, handler):
        try:
            return handler(value)
        except ValidationError:
            return None


class WorkflowRef(LenientModel):
    """Reference to an upstream workflow."""

    id: Optional[str] = Field(None, description="Upstream workflow identifier")


class SessionScope(LenientModel):
    """Caller-supplied scope. Accepted for compatibility; not forwarded."""

    user_id: Optional[str] = None


class FileUploadOptions(LenientModel):
    enabled: Optional[bool] = None


class ChatKitConfiguration(LenientModel):
    file_upload: Optional[FileUploadOptions] = None


class CreateSessionRequest(LenientModel):
    """Optional body of POST /api/create-session."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    workflow: Optional[WorkflowRef] = None
    workflow_id: Optional[str] = Field(
        None, alias="workflowId", description="Alternative to workflow.id"
    )
    scope: Optional[SessionScope] = None
    chatkit_configuration: Optional[ChatKitConfiguration] = None

    def resolve_workflow_id(self, default: Optional[str] = None) -> Optional[str]:
        """First non-null of workflow.id, workflowId, default."""
        if self.workflow is not None and self.workflow.id is not None:
            return self.workflow.id
        if self.workflow_id is not None:
            return self.workflow_id
        return default

    @property
    def file_upload_enabled(self) -> bool:
        config = self.chatkit_configuration
        if config is None or config.file_upload is None:
            return False
        return bool(config.file_upload.enabled)


# Response Models (API Output)


class ReusedSessionResponse(BaseModel):
    """Credential served from the client-secret cookie."""

    client_secret: str
    reused: bool = True


class CreatedSessionResponse(BaseModel):
    """Credential freshly minted by the upstream API."""

    client_secret: Optional[str] = None
    expires_after: Optional[Any] = None
    reused: bool = False


class ErrorResponse(BaseModel):
    """Error body. `details` carries the raw upstream payload when relevant."""

    error: str
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    status: str
    upstream_configured: bool
    environment: str
    version: str
