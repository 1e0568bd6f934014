"""
Port AI Adapter

Runs Port's AI invocation API on behalf of a workflow host and decodes
its Server-Sent-Events responses into structured results.

Components:
- utils: base URL normalization, query strings, JSON parameter parsing
- sse: SSE response decoding
- port_client: token exchange and HTTP transport
- operations: invokeAgent, generalInvoke, getInvocation request builders
- node: node variants and batch dispatch
- api: node execution endpoints
"""

__version__ = "0.1.0"

from .main import app
