"""Per-item parameter access and node variant settings."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .errors import ValidationError

_MISSING = object()


@dataclass(frozen=True)
class NodeVariant:
    """
    One configuration of the shared node core.

    Both published nodes run the same operations; they differ only in
    field defaults and a few request-shaping switches.
    """
    name: str
    display_name: str
    credential_name: str
    default_operation: str = ""
    require_prompt: bool = True
    supports_additional_headers: bool = False
    invocation_field: str = "invocation_identifier"
    field_defaults: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "field_defaults", MappingProxyType(dict(self.field_defaults)))


class ParameterBag:
    """
    Parameters of one input item, with the node's field defaults beneath.

    Lookup order for ``get``: value set on the item, field default,
    then the fallback given by the caller.
    """

    def __init__(self, values: Mapping[str, Any], defaults: Optional[Mapping[str, Any]] = None, index: int = 0):
        self.values = dict(values or {})
        self.defaults = dict(defaults or {})
        self.index = index

    def get(self, name: str, default: Any = None) -> Any:
        if name in self.values:
            return self.values[name]
        return self.defaults.get(name, default)

    def require(self, name: str) -> Any:
        """Return a parameter, raising ValidationError when it was never set."""
        value = self.get(name, _MISSING)
        if value is _MISSING:
            raise ValidationError(
                f"Missing required parameter: {name}",
                f"Item {self.index} does not define '{name}'.",
            )
        return value

    def require_text(self, name: str, label: str) -> str:
        """Return a required string parameter that must not be empty."""
        value = self.require(name)
        if value is None or not str(value).strip():
            raise ValidationError(
                f"{label} is required",
                f"Item {self.index} has an empty '{name}' parameter.",
            )
        return str(value)

    def text(self, name: str) -> str:
        """Optional string parameter; None becomes ""."""
        value = self.get(name, "")
        return "" if value is None else str(value)

    def flag(self, name: str) -> bool:
        value = self.get(name, False)
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return bool(value)
