"""Fetch an invocation's result: GET /v1/ai/invoke/{invocation_identifier}."""

from typing import Any, Dict, Optional, Tuple

import httpx

from ..models import InvocationRequest, NodeProperty, OperationInfo
from ..parameters import NodeVariant, ParameterBag
from ..port_client import PortClient, upstream_error
from ..utils import encode_uri_component

OPERATION = OperationInfo(
    name="Get an Invocation's Result",
    value="getInvocation",
    description="GET /v1/ai/invoke/:invocation_identifier",
    action="Get The Result of an AI Interaction Invocation",
)


def fields(variant: NodeVariant) -> Tuple[NodeProperty, ...]:
    return (
        NodeProperty(variant.invocation_field, "Invocation Identifier", "string", "", True,
                     "The invocation identifier to fetch"),
    )


def build_request(params: ParameterBag, variant: NodeVariant) -> InvocationRequest:
    invocation_identifier = params.require_text(variant.invocation_field, "Invocation Identifier")
    return InvocationRequest(
        method="GET",
        path=f"/v1/ai/invoke/{encode_uri_component(invocation_identifier)}",
    )


async def execute(
    client: PortClient,
    params: ParameterBag,
    variant: NodeVariant,
    base_url: str,
    access_token: str,
    extra_headers: Optional[Dict[str, str]] = None,
) -> Any:
    request = build_request(params, variant)
    invocation_identifier = params.text(variant.invocation_field)

    try:
        return await client.get_json(f"{base_url}{request.target}", access_token, extra_headers)
    except (httpx.HTTPError, ValueError) as e:
        raise upstream_error(
            "get invocation result",
            e,
            f"Invocation identifier: {invocation_identifier}. "
            "Please verify the invocation identifier exists and your credentials are correct.",
            {"invocationIdentifier": invocation_identifier},
        ) from e
