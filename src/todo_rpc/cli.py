"""
todo-rpc command line.

    todo-rpc serve --port 8000        run the RPC server
    todo-rpc list                     show todos from a running server
    todo-rpc add "Buy milk"           create a todo
    todo-rpc toggle 3                 flip completion of todo 3
    todo-rpc delete 3                 delete todo 3
    todo-rpc export-schema out.json   write the OpenAPI contract
"""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .app_state import TodoListController
from .client import TodoRpcClient
from .logging_setup import setup_logging
from .settings import get_settings

logger = logging.getLogger(__name__)


def cmd_serve(args) -> int:
    import uvicorn

    logger.info("Serving todo RPC on %s:%s", args.host, args.port)
    uvicorn.run("todo_rpc.main:app", host=args.host, port=args.port, log_level="warning")
    return 0


def cmd_export_schema(args) -> int:
    from .generate_openapi import generate_openapi

    print(f"Wrote OpenAPI schema to: {generate_openapi(args.output)}")
    return 0


def _open_client(args) -> TodoRpcClient:
    return TodoRpcClient(base_url=args.url)


def _load(client: TodoRpcClient) -> TodoListController:
    controller = TodoListController(client)
    controller.load()
    return controller


def cmd_list(args) -> int:
    with _open_client(args) as client:
        print(_load(client).render())
    return 0


def cmd_add(args) -> int:
    with _open_client(args) as client:
        controller = _load(client)
        controller.new_description = " ".join(args.text)
        if controller.create() is None:
            print("Nothing added.")
            return 1
        print(controller.render())
    return 0


def cmd_toggle(args) -> int:
    with _open_client(args) as client:
        controller = _load(client)
        todo = controller.find(args.id)
        if todo is None or controller.toggle(todo) is None:
            print(f"Todo {args.id} could not be updated.")
            return 1
        print(controller.render())
    return 0


def cmd_delete(args) -> int:
    with _open_client(args) as client:
        controller = _load(client)
        if not controller.delete(args.id):
            print(f"Todo {args.id} was not deleted.")
            return 1
        print(controller.render())
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="todo-rpc",
        description="Minimal todo list over a typed RPC service",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level (default from LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    p_serve = subparsers.add_parser("serve", help="Run the RPC server")
    p_serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    p_serve.add_argument("--port", default=8000, type=int, help="Port number (default: 8000)")

    p_schema = subparsers.add_parser("export-schema", help="Write the OpenAPI contract to a file")
    p_schema.add_argument("output", nargs="?", default=None, help="Output path (default: interfaces/openapi.json)")

    for name, help_text in (
        ("list", "List todos"),
        ("add", "Create a todo"),
        ("toggle", "Toggle completion of a todo"),
        ("delete", "Delete a todo"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("--url", default=settings.server_url, help="Server URL (default from TODO_RPC_URL)")
        if name == "add":
            p.add_argument("text", nargs="+", help="Todo description")
        elif name in ("toggle", "delete"):
            p.add_argument("id", type=int, help="Todo id")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    commands = {
        "serve": cmd_serve,
        "export-schema": cmd_export_schema,
        "list": cmd_list,
        "add": cmd_add,
        "toggle": cmd_toggle,
        "delete": cmd_delete,
    }

    if args.command in commands:
        return commands[args.command](args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
