"""
Node operations.

Each operation module provides:
- OPERATION: menu entry
- fields(variant): parameter descriptions
- build_request(params, variant): pure request shaping
- execute(client, params, variant, base_url, access_token, extra_headers)
"""

from . import general_invoke, get_invocation, invoke_agent

# Menu order
OPERATION_MODULES = (invoke_agent, general_invoke, get_invocation)

OPERATIONS = {module.OPERATION.value: module for module in OPERATION_MODULES}
