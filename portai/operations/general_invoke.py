"""General-purpose AI interaction: POST /v1/ai/invoke."""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from ..models import (
    EXECUTION_MODE_OPTIONS,
    MODEL_OPTIONS,
    PROVIDER_OPTIONS,
    InvocationRequest,
    NodeProperty,
    OperationInfo,
)
from ..parameters import NodeVariant, ParameterBag
from ..port_client import PortClient, upstream_error
from ..sse import extract_response_text, parse_sse_response
from ..utils import parse_json_parameter, parse_tools_parameter

logger = logging.getLogger(__name__)

OPERATION = OperationInfo(
    name="General-Purpose AI Interactions",
    value="generalInvoke",
    description="POST /v1/ai/invoke",
    action="Invoke a General-Purpose AI Interaction",
)

DEFAULT_TOOLS = '["^(list|get|search|track|describe|run_*)_.*"]'

# Node parameter name -> request body field
_OPTIONAL_TEXT_FIELDS = (
    ("generalProvider", "provider"),
    ("generalModel", "model"),
    ("systemPrompt", "systemPrompt"),
    ("executionMode", "executionMode"),
)


def fields(variant: NodeVariant) -> Tuple[NodeProperty, ...]:
    return (
        NodeProperty("userPrompt", "User Prompt", "string", "", True, "The user prompt (required)"),
        NodeProperty("tools", "Tools", "string", DEFAULT_TOOLS, True,
                     'Array of tool names as JSON string (e.g., ["tool1", "tool2"])'),
        NodeProperty("generalLabels", "Labels", "json", "{}", False, "Optional labels object"),
        NodeProperty("generalProvider", "Provider", "options", "openai", False, "Optional provider",
                     PROVIDER_OPTIONS),
        NodeProperty("generalModel", "Model", "options", "gpt-5", False, "Optional model", MODEL_OPTIONS),
        NodeProperty("systemPrompt", "System Prompt", "string", "", False, "Optional system prompt"),
        NodeProperty("executionMode", "Execution Mode", "options", "Approval Required", False,
                     "Optional execution mode", EXECUTION_MODE_OPTIONS),
        NodeProperty("invocation_identifier", "Invocation Identifier", "string", "", False,
                     "Optional invocation identifier"),
    )


def build_request(params: ParameterBag, variant: NodeVariant) -> InvocationRequest:
    """
    Shape the general invoke request.

    Tools are validated strictly before anything else is sent; labels
    fall back silently to "absent".
    """
    params.require("userPrompt")
    payload: Dict[str, Any] = {
        "userPrompt": params.text("userPrompt"),
        "tools": parse_tools_parameter(params.require("tools")),
    }

    labels = parse_json_parameter(params.get("generalLabels", "{}"))
    if labels:
        payload["labels"] = labels

    for name, body_field in _OPTIONAL_TEXT_FIELDS:
        value = params.text(name)
        if value:
            payload[body_field] = value

    return InvocationRequest(
        method="POST",
        path="/v1/ai/invoke",
        query={"invocation_identifier": params.text("invocation_identifier")},
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

    try:
        raw = await client.post_sse(f"{base_url}{request.target}", access_token, request.body, extra_headers)
    except httpx.HTTPError as e:
        raise upstream_error(
            "invoke general AI interaction",
            e,
            "Please verify your credentials and that the required fields "
            "(User Prompt and Tools) are correctly formatted.",
            {"invocationIdentifier": params.text("invocation_identifier") or None},
        ) from e

    result = parse_sse_response(extract_response_text(raw))
    logger.info(f"General invoke returned {len(result.events)} events "
                f"(invocation {result.invocation_identifier})")
    return result.to_dict()
