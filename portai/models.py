"""Data models for the Port AI adapter."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from .config import DEFAULT_BASE_URL
from .utils import build_query_string


# ============================================================================
# Static Node Options
# ============================================================================

class NodeOption(NamedTuple):
    """One entry of an options menu."""
    name: str
    value: str


PROVIDER_OPTIONS: Tuple[NodeOption, ...] = (
    NodeOption("Anthropic", "anthropic"),
    NodeOption("Azure OpenAI", "azure-openai"),
    NodeOption("Bedrock", "bedrock"),
    NodeOption("OpenAI", "openai"),
    NodeOption("Port", "port"),
)

MODEL_OPTIONS: Tuple[NodeOption, ...] = (
    NodeOption("GPT-5", "gpt-5"),
    NodeOption("Claude Sonnet 4", "claude-sonnet-4-20250514"),
    NodeOption("Claude Haiku 4.5", "claude-haiku-4-5-20251001"),
)

EXECUTION_MODE_OPTIONS: Tuple[NodeOption, ...] = (
    NodeOption("Automatic", "Automatic"),
    NodeOption("Approval Required", "Approval Required"),
)


# ============================================================================
# Node Description Models
# ============================================================================

@dataclass(frozen=True)
class OperationInfo:
    """Operation menu entry."""
    name: str
    value: str
    description: str
    action: str


@dataclass(frozen=True)
class NodeProperty:
    """Description of a single node parameter."""
    name: str
    display_name: str
    type: str
    default: Any = ""
    required: bool = False
    description: str = ""
    options: Tuple[NodeOption, ...] = ()

    def with_default(self, default: Any) -> "NodeProperty":
        return replace(self, default=default)

    def to_dict(self, operation: str) -> Dict[str, Any]:
        data = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type,
            "default": self.default,
            "required": self.required,
            "description": self.description,
            "displayOptions": {"show": {"operation": [operation]}},
        }
        if self.options:
            data["options"] = [o._asdict() for o in self.options]
        return data


# ============================================================================
# Upstream Request
# ============================================================================

QueryValue = Union[str, bool, None]


@dataclass(frozen=True)
class InvocationRequest:
    """A fully shaped upstream request, relative to the normalized base URL."""
    method: str
    path: str
    query: Mapping[str, QueryValue] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    @property
    def target(self) -> str:
        """Path with the serialized query string appended."""
        return f"{self.path}{build_query_string(self.query)}"


# ============================================================================
# HTTP Surface Models
# ============================================================================

class Credentials(BaseModel):
    """Port API client credentials, supplied once per batch."""
    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(alias="clientId")
    client_secret: SecretStr = Field(alias="clientSecret")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseUrl")


class HeaderPair(BaseModel):
    """Extra header sent with every invocation request."""
    name: str = ""
    value: Optional[str] = ""


class ExecuteRequest(BaseModel):
    """Batch of input items for one node execution."""
    model_config = ConfigDict(populate_by_name=True)

    credentials: Optional[Credentials] = None
    items: List[Dict[str, Any]] = Field(default_factory=list)
    additional_headers: List[HeaderPair] = Field(default_factory=list, alias="additionalHeaders")
    continue_on_fail: bool = Field(default=False, alias="continueOnFail")


class ExecutionItem(BaseModel):
    """One output item, positionally aligned with the input item."""
    json_: Any = Field(alias="json", serialization_alias="json")


class ExecuteResponse(BaseModel):
    """Node output."""
    data: List[ExecutionItem]


class CredentialTestRequest(BaseModel):
    credentials: Optional[Credentials] = None


class CredentialTestResult(BaseModel):
    status: str
    message: str
