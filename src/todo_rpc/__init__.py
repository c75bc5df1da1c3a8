"""
Todo RPC package.

Exposes the FastAPI app instance at package level (`todo_rpc.app`) for
ASGI servers that prefer the short import path.
"""

from .main import app  # noqa: F401
