"""Taskboard CLI entry point"""

import argparse
import logging

import uvicorn

from taskboard.storage.migrations import PROJECT_DIR, get_project_config, save_project_config


def init_project():
    """Initialize .taskboard directory and configuration"""
    PROJECT_DIR.mkdir(exist_ok=True)

    # Fills in defaults for any missing keys
    save_project_config(get_project_config())

    print(f"Initialized taskboard in {PROJECT_DIR.absolute()}")


def serve(host: str = "127.0.0.1", port: int = 8080, reload: bool = False, log_level: str = "info"):
    """Start the taskboard server"""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "taskboard.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level
    )


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(description="Taskboard - kanban boards with ordered columns and tasks")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Init command
    subparsers.add_parser("init", help="Initialize taskboard in current directory")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start taskboard server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.add_argument("--log-level", default="info",
                              choices=["critical", "error", "warning", "info", "debug"],
                              help="Log level for the application and uvicorn")

    args = parser.parse_args()

    if args.command == "init":
        init_project()
    elif args.command == "serve":
        serve(args.host, args.port, args.reload, args.log_level)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
