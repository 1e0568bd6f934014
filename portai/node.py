"""
Port node: operation dispatch over a batch of input items.

A batch shares one access token. Items run strictly one after another,
and the output list is positionally aligned with the input.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .config import DEFAULT_BASE_URL
from .errors import AuthenticationError, UnknownOperationError, UpstreamError, ValidationError
from .models import Credentials, NodeProperty
from .operations import OPERATION_MODULES, OPERATIONS
from .parameters import NodeVariant, ParameterBag
from .port_client import PortClient, port
from .utils import normalize_base_url

logger = logging.getLogger(__name__)


PORT_API_AI = NodeVariant(
    name="portApiAi",
    display_name="Port API AI",
    credential_name="portApi",
)

PORT_IO = NodeVariant(
    name="portIo",
    display_name="Port.io",
    credential_name="portIoApi",
    default_operation="invokeAgent",
    require_prompt=False,
    supports_additional_headers=True,
    invocation_field="invocationId",
    field_defaults={
        "model": "",
        "generalModel": "",
        "tools": "",
        "executionMode": "Automatic",
    },
)

VARIANTS: Dict[str, NodeVariant] = {v.name: v for v in (PORT_API_AI, PORT_IO)}


class PortNode:
    """
    Executes Port AI operations for one node variant.

    Handles:
    - Token exchange once per batch
    - Per-item operation lookup and execution
    - Credential self-test
    - Static node description
    """

    def __init__(self, variant: NodeVariant = PORT_API_AI, client: Optional[PortClient] = None):
        self.variant = variant
        self.client = client or port

    def properties(self) -> List[Tuple[str, NodeProperty]]:
        """(operation, property) pairs with this variant's defaults applied."""
        overrides = self.variant.field_defaults
        props = []
        for module in OPERATION_MODULES:
            for prop in module.fields(self.variant):
                if prop.name in overrides:
                    prop = prop.with_default(overrides[prop.name])
                props.append((module.OPERATION.value, prop))
        return props

    def field_defaults(self) -> Dict[str, Any]:
        defaults: Dict[str, Any] = {"operation": self.variant.default_operation}
        for _, prop in self.properties():
            defaults.setdefault(prop.name, prop.default)
        return defaults

    def extra_headers(self, pairs: Optional[Iterable[Any]]) -> Dict[str, str]:
        """Collect name/value header pairs, skipping unnamed ones."""
        if not pairs:
            return {}
        if not self.variant.supports_additional_headers:
            logger.warning(f"{self.variant.name} does not support additional headers, ignoring them")
            return {}

        headers = {}
        for pair in pairs:
            if isinstance(pair, Mapping):
                name, value = pair.get("name"), pair.get("value")
            else:
                name, value = pair.name, pair.value
            if name:
                headers[name] = value or ""
        return headers

    async def _authenticate(self, credentials: Credentials) -> Tuple[str, str]:
        base_url = normalize_base_url(credentials.base_url or DEFAULT_BASE_URL)
        access_token = await self.client.get_access_token(
            base_url,
            credentials.client_id,
            credentials.client_secret.get_secret_value(),
        )
        return base_url, access_token

    async def execute(
        self,
        items: List[Mapping[str, Any]],
        credentials: Credentials,
        additional_headers: Optional[Iterable[Any]] = None,
        continue_on_fail: bool = False,
    ) -> List[Any]:
        """
        Run every item and return one result per item.

        An unknown operation aborts the whole batch. Validation and
        upstream failures abort it too, unless continue_on_fail is set,
        in which case the item's slot holds {"error": message}.
        """
        logger.info(f"Executing {self.variant.name} with {len(items)} item(s)")

        base_url, access_token = await self._authenticate(credentials)
        headers = self.extra_headers(additional_headers)
        defaults = self.field_defaults()

        results: List[Any] = []
        for i, item in enumerate(items):
            params = ParameterBag(item, defaults, index=i)
            operation = params.text("operation")

            module = OPERATIONS.get(operation)
            if module is None:
                raise UnknownOperationError(operation, list(OPERATIONS))

            try:
                result = await module.execute(self.client, params, self.variant, base_url, access_token, headers)
            except (ValidationError, UpstreamError) as e:
                if not continue_on_fail:
                    raise
                logger.warning(f"Item {i} ({operation}) failed: {e.message}")
                result = {"error": e.message}

            results.append(result)

        logger.info(f"Finished {self.variant.name}: {len(results)} result(s)")
        return results

    async def test_credentials(self, credentials: Credentials) -> Dict[str, str]:
        """Credential self-test: a single token exchange."""
        try:
            await self._authenticate(credentials)
        except AuthenticationError as e:
            return {"status": "Error", "message": e.message}
        return {"status": "OK", "message": "Connection successful"}

    def describe(self) -> Dict[str, Any]:
        """Static node description: operations and their parameters."""
        properties: List[Dict[str, Any]] = [
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "noDataExpression": True,
                "options": [
                    {
                        "name": m.OPERATION.name,
                        "value": m.OPERATION.value,
                        "description": m.OPERATION.description,
                        "action": m.OPERATION.action,
                    }
                    for m in OPERATION_MODULES
                ],
                "default": self.variant.default_operation,
            }
        ]
        if self.variant.supports_additional_headers:
            properties.append({
                "displayName": "Additional Headers",
                "name": "additionalHeaders",
                "type": "fixedCollection",
                "default": {},
                "options": [{"name": "headers", "values": ["name", "value"]}],
            })
        properties.extend(prop.to_dict(operation) for operation, prop in self.properties())

        return {
            "displayName": self.variant.display_name,
            "name": self.variant.name,
            "description": "Invoke Port AI agents, call general AI interactions, and fetch invocation results",
            "credentials": [{"name": self.variant.credential_name, "required": True}],
            "properties": properties,
        }
