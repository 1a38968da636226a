"""Process entry point: ``python -m dogs_service`` or the ``dogs-service`` script."""

from __future__ import annotations


def main() -> None:
    """Start uvicorn on the port selected by the ``ENVIRONMENT`` mode flag."""
    import uvicorn

    from dogs_service.api import ServerSettings, create_app

    server = ServerSettings()
    uvicorn.run(create_app(), host=server.host, port=server.port)


if __name__ == "__main__":
    main()
