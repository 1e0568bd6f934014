"""
Node execution endpoints.

Lets a workflow host run a Port node over HTTP: read the node
descriptions, execute a batch of items, and test credentials.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from .config import config
from .errors import ValidationError
from .models import (
    CredentialTestRequest,
    CredentialTestResult,
    Credentials,
    ExecuteRequest,
    ExecuteResponse,
    ExecutionItem,
)
from .node import VARIANTS, PortNode
from .port_client import PortClient, port

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")


def get_client() -> PortClient:
    """Shared Port API client."""
    return port


def _get_node(node_name: str, client: PortClient) -> PortNode:
    variant = VARIANTS.get(node_name)
    if variant is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown node: {node_name}. Available nodes: {', '.join(VARIANTS)}",
        )
    return PortNode(variant, client)


def _resolve_credentials(credentials: Optional[Credentials] = None) -> Credentials:
    """Request credentials, or the ones configured in the environment."""
    if credentials is not None:
        return credentials
    if not config.has_credentials:
        raise ValidationError(
            "Missing credentials",
            "Pass credentials in the request or set PORT_CLIENT_ID and PORT_CLIENT_SECRET.",
        )
    return Credentials(
        client_id=config.client_id,
        client_secret=config.client_secret,
        base_url=config.base_url,
    )


@router.get("/nodes")
async def list_nodes(client: PortClient = Depends(get_client)):
    """Descriptions of every node variant."""
    return {"nodes": [PortNode(v, client).describe() for v in VARIANTS.values()]}


@router.get("/nodes/{node_name}")
async def describe_node(node_name: str, client: PortClient = Depends(get_client)):
    return _get_node(node_name, client).describe()


@router.post("/nodes/{node_name}/execute", response_model=ExecuteResponse)
async def execute_node(node_name: str, request: ExecuteRequest, client: PortClient = Depends(get_client)):
    """
    Execute a batch of items.

    Each item is the parameter set for one run (operation plus its
    fields). Results come back in input order as {"json": result}.
    """
    node = _get_node(node_name, client)
    credentials = _resolve_credentials(request.credentials)

    results = await node.execute(
        request.items,
        credentials,
        additional_headers=request.additional_headers,
        continue_on_fail=request.continue_on_fail,
    )
    return ExecuteResponse(data=[ExecutionItem(json=r) for r in results])


@router.post("/nodes/{node_name}/credentials/test", response_model=CredentialTestResult)
async def test_credentials(
    node_name: str,
    request: CredentialTestRequest,
    client: PortClient = Depends(get_client),
):
    node = _get_node(node_name, client)
    result = await node.test_credentials(_resolve_credentials(request.credentials))
    logger.info(f"Credential test for {node_name}: {result['status']}")
    return CredentialTestResult(**result)
