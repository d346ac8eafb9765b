#!/usr/bin/env python3
"""
skube Intent MCP Server.

Exposes a single `skube(command="...")` tool that accepts a natural
language command line and returns the parsed, name-resolved intent as
JSON. Nothing is executed against the cluster.

Port: 8891 (configurable via SKUBE_INTENT_MCP_PORT)
Transport: SSE
"""

import json
import logging
import os
import sys

from fastmcp import FastMCP

from skube_intent import SkubeIntentParser
from skube_intent.patterns import load_cluster_patterns

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("skube-intent.mcp")

# Configuration
MCP_ENABLED = os.getenv("SKUBE_INTENT_MCP_ENABLED", "false").lower() == "true"
MCP_PORT = int(os.getenv("SKUBE_INTENT_MCP_PORT", "8891"))
MCP_HOST = os.getenv("SKUBE_INTENT_MCP_HOST", "0.0.0.0")
KUBE_CONTEXT = os.getenv("SKUBE_KUBE_CONTEXT", "")

# Create FastMCP server
mcp = FastMCP(name="skube-intent-parser")

parser = SkubeIntentParser(load_cluster_patterns(context=KUBE_CONTEXT or None))


@mcp.tool()
async def skube(command: str) -> str:
    """
    Parse a kubectl-style request written in plain English.

    Args:
        command: What you want to do, e.g. "logs of myapp in qa".

    Examples:
        - "get pods in qa"
        - "in qa logs from app myapp"
        - "scale deployment backend to 3 in prod"
        - "restart the backend deployment in staging"
        - "forward service web port 8080 in dev"
        - "--ai show me what's crashing in staging"

    Returns:
        JSON object with the populated intent fields (camelCase), after
        resolving names against the learned cluster patterns.
    """
    logger.info(f"Tool called: skube(command='{command[:80]}')")

    intent = await parser.process(command)
    return json.dumps(intent.populated(by_alias=True), indent=2)


def main():
    """Main entry point."""
    if not MCP_ENABLED:
        logger.warning("=" * 60)
        logger.warning("skube Intent MCP Server is DISABLED")
        logger.warning("To enable: export SKUBE_INTENT_MCP_ENABLED=true")
        logger.warning("=" * 60)
        sys.exit(0)

    logger.info("=" * 60)
    logger.info("Starting FastMCP skube Intent Server")
    logger.info(f"Host: {MCP_HOST}")
    logger.info(f"Port: {MCP_PORT}")
    logger.info(f"Patterns loaded: {parser.resolver.has_patterns()}")
    logger.info("Tool: skube(command='...')")
    logger.info("=" * 60)

    mcp.run(transport="sse", host=MCP_HOST, port=MCP_PORT)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
