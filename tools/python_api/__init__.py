"""
Custom Python API tool: the model may call it to have the user's own API process a query.
Runs in simulation mode when no apiUrl is passed. Exposed as call_python_api_tool.
"""
from langchain.tools import tool

from tools.python_api.client import invoke_python_api, simulated_response


@tool
def call_python_api_tool(query: str, api_url: str = "", api_password: str = "") -> str:
    """
    Calls a custom Python API for additional processing or information. The API URL and password should be
    passed to this tool if a custom API interaction is intended and these details are available in the
    broader context. If api_url is not provided, the tool will simulate a response.
    query: the query or data to send to the Python API.
    api_url: the specific URL of the Python API to call (only when a custom API is configured).
    api_password: the password/key for the Python API (only when a custom API is configured).
    """
    return invoke_python_api(query, api_url or None, api_password or None)


# Flat list for agent registration
PYTHON_API_TOOLS = [call_python_api_tool]

__all__ = ["call_python_api_tool", "invoke_python_api", "simulated_response", "PYTHON_API_TOOLS"]
