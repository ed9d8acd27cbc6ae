"""Harvest REST API bindings.

Endpoint functions take the account subdomain and access token explicitly
and return request descriptors; nothing here performs network I/O.

Usage:
    import asyncio

    from harvest_client.api.endpoints import clients
    from harvest_client.core.transport import create_client, send

    async def main():
        async with create_client() as http:
            return await send(clients.list_clients("acme", token), http)

    asyncio.run(main())
"""

__all__ = ["auth_url", "extract_access_token", "endpoints"]

from harvest_client.api import endpoints  # noqa: F401
from harvest_client.api.auth import auth_url, extract_access_token  # noqa: F401
