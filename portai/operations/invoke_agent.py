"""Invoke a specific Port AI agent: POST /v1/agent/{agentIdentifier}/invoke."""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from ..models import MODEL_OPTIONS, PROVIDER_OPTIONS, InvocationRequest, NodeProperty, OperationInfo
from ..parameters import NodeVariant, ParameterBag
from ..port_client import PortClient, upstream_error
from ..sse import extract_response_text, parse_sse_response
from ..utils import encode_uri_component, parse_json_parameter

logger = logging.getLogger(__name__)

OPERATION = OperationInfo(
    name="Invoke a Specific Agent",
    value="invokeAgent",
    description="POST /v1/agent/:agentIdentifier/invoke",
    action="Invoke an AI Interaction with a Specific Agent",
)


def fields(variant: NodeVariant) -> Tuple[NodeProperty, ...]:
    """Parameters shown for this operation."""
    return (
        NodeProperty("agentIdentifier", "Agent Identifier", "string", "", True,
                     "The agent identifier to invoke"),
        NodeProperty("context", "Context", "json", "{}", False, "Optional context object"),
        NodeProperty("prompt", "Prompt", "string", "", variant.require_prompt,
                     "Prompt string" if variant.require_prompt else "Optional prompt string"),
        NodeProperty("labels", "Labels", "json", "{}", False, "Optional labels object"),
        NodeProperty("provider", "Provider", "options", "port", False, "Optional provider",
                     PROVIDER_OPTIONS),
        NodeProperty("model", "Model", "options", "gpt-5", False, "Model selection", MODEL_OPTIONS),
        NodeProperty("invocation_identifier", "Invocation Identifier", "string", "", False,
                     "Optional invocation identifier"),
        NodeProperty("stream", "Stream", "boolean", False, False, "Whether to stream the response"),
        NodeProperty("use_mcp", "Use MCP", "boolean", False, False, "Whether to use MCP"),
    )


def build_request(params: ParameterBag, variant: NodeVariant) -> InvocationRequest:
    agent_identifier = params.require_text("agentIdentifier", "Agent Identifier")

    payload: Dict[str, Any] = {}

    context = parse_json_parameter(params.get("context", "{}"))
    if context:
        payload["context"] = context

    if variant.require_prompt:
        payload["prompt"] = params.require("prompt")
    else:
        prompt = params.text("prompt")
        if prompt:
            payload["prompt"] = prompt

    labels = parse_json_parameter(params.get("labels", "{}"))
    if labels:
        payload["labels"] = labels

    provider = params.text("provider")
    if provider:
        payload["provider"] = provider

    model = params.text("model")
    if model:
        payload["model"] = model

    return InvocationRequest(
        method="POST",
        path=f"/v1/agent/{encode_uri_component(agent_identifier)}/invoke",
        query={
            "invocation_identifier": params.text("invocation_identifier"),
            "stream": params.flag("stream"),
            "use_mcp": params.flag("use_mcp"),
        },
        body=payload,
    )


async def execute(
    client: PortClient,
    params: ParameterBag,
    variant: NodeVariant,
    base_url: str,
    access_token: str,
    extra_headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    request = build_request(params, variant)
    agent_identifier = params.text("agentIdentifier")

    try:
        raw = await client.post_sse(f"{base_url}{request.target}", access_token, request.body, extra_headers)
    except httpx.HTTPError as e:
        raise upstream_error(
            "invoke agent",
            e,
            f"Agent identifier: {agent_identifier}. "
            "Please verify the agent identifier and your credentials are correct.",
            {"agentIdentifier": agent_identifier},
        ) from e

    result = parse_sse_response(extract_response_text(raw))
    logger.info(f"Agent {agent_identifier} returned {len(result.events)} events "
                f"(invocation {result.invocation_identifier})")
    return result.to_dict()
