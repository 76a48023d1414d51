import asyncio
import sys

from mcp import ClientSession
from mcp.client.streamable_http import streamablehttp_client


NODES = ["ns=0;i=2255", "ns=0;i=2267", "ns=0;i=12710"]


async def read_all(url: str) -> None:
    async with streamablehttp_client(url) as (read, write, _):
        async with ClientSession(read, write) as session:
            await session.initialize()

            desc = await session.call_tool("get_application_description", {})
            for block in desc.content:
                print(getattr(block, "text", block))

            for node_id in NODES:
                result = await session.call_tool("read_variable", {"node_id": node_id})
                for block in result.content:
                    print(node_id, getattr(block, "text", block))


def main():
    port = sys.argv[1] if len(sys.argv) > 1 else "4840"
    asyncio.run(read_all(f"http://127.0.0.1:{port}/mcp"))


if __name__ == "__main__":
    main()
