#!/usr/bin/env python3
"""
MCP Server SSE Example.

Connects to a running formgen MCP server over SSE, lists its tools and
compiles a small sign-up form.

Prerequisites:
    python run_mcp_server.py --transport sse --port 8080
    curl http://localhost:8080/health

Usage:
    python examples/mcp_sse_example.py
"""

import asyncio
import json
import os

from mcp import ClientSession
from mcp.client.sse import sse_client

SERVER_URL = os.environ.get("FORMGEN_MCP_URL", "http://localhost:8080/sse")

SIGNUP_FORM = [
    [
        {"variant": "Input", "name": "email", "label": "Email", "type": "email", "required": True},
        {"variant": "Switch", "name": "subscribe", "label": "Subscribe to newsletter"},
    ],
    {"variant": "Slider", "name": "price", "label": "Budget", "min": 10, "max": 500, "step": 10},
    {"variant": "Combobox", "name": "language", "label": "Language"},
]


async def main():
    async with sse_client(SERVER_URL) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()

            tools = await session.list_tools()
            print("Tools:", ", ".join(tool.name for tool in tools.tools))

            result = await session.call_tool("compile_form", {"form_definition": SIGNUP_FORM})
            compiled = json.loads(result.content[0].text)
            if compiled.get("error"):
                print("Error:", compiled["message"])
                return

            print("Default values:", json.dumps(compiled["defaultValues"], indent=2))
            for warning in compiled["warnings"]:
                print("Warning:", warning["message"])
            print(compiled["code"])

            result = await session.call_tool(
                "validate_form_data",
                {"form_definition": SIGNUP_FORM, "data": {"email": "", "price": 900}},
            )
            print("Validation:", result.content[0].text)


if __name__ == "__main__":
    asyncio.run(main())
