"""Run the admin API with uvicorn."""

import argparse

import uvicorn

from .main import create_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the RBAC admin API.")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind.")
    args = parser.parse_args()

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
