"""Course Library MCP Server - FastMCP Implementation

Serves the course library over MCP: authors and their courses, with data
shaping, mapped sorting, paging metadata and HATEOAS links.

Features exposed:
- Resources: author list, author details, courses, author collections
- Tools: author browsing and negotiation, author/course creation and changes

Start-up order matters: the property mapping registry is built and frozen
before any resource or tool is registered, and is read-only afterwards.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from .config import ServerConfig, get_config
from .database.session import get_db_manager
from .property_mappings import build_property_mapping_registry
from .resources import build_resources
from .tools import build_tools

# Initialize logging - stderr for logs, stdout for MCP protocol
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

logger = logging.getLogger(__name__)


def configure_logging(config: ServerConfig) -> None:
    """Apply the configured log level; debug mode wins."""
    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled - verbose protocol logging active")
    else:
        logging.getLogger().setLevel(config.log_level)
        logging.getLogger("fastmcp").setLevel(logging.WARNING)


def register_resources(mcp: FastMCP, resources: list[dict[str, Any]]) -> None:
    for resource in resources:
        uri = resource.get("uri_template", resource.get("uri"))
        if not uri:
            logger.error("Resource missing URI: %s", resource)
            continue

        logger.debug("Registering resource: %s with URI: %s", resource["name"], uri)
        try:
            mcp.resource(
                uri=uri,
                name=resource["name"],
                description=resource["description"],
                mime_type=resource["mime_type"],
            )(resource["handler"])
        except Exception:
            logger.exception("Failed to register resource %s", resource["name"])
            raise

    logger.info("Registered %d resources", len(resources))


def register_tools(mcp: FastMCP, tools: list[dict[str, Any]]) -> None:
    for tool in tools:
        logger.debug("Registering tool: %s", tool["name"])
        try:
            mcp.tool(
                name=tool["name"],
                description=tool["description"],
            )(tool["handler"])
        except Exception:
            logger.exception("Failed to register tool %s", tool["name"])
            raise

    logger.info("Registered %d tools", len(tools))


def create_server(config: ServerConfig | None = None) -> FastMCP:
    """Build the FastMCP server with every resource and tool registered."""
    config = config or get_config()

    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Course Library MCP Server - authors and the courses they teach. "
            "Read authors and courses through library:// resources. Use the "
            "browse_authors tool to filter, search, sort (orderBy), page and "
            "shape (fields) the author collection, get_author to pick a "
            "representation by media type, and the create/update/delete tools "
            "to change data. Responses carry links to related actions."
        ),
    )

    property_mappings = build_property_mapping_registry()
    register_resources(mcp, build_resources(property_mappings))
    register_tools(mcp, build_tools(property_mappings))
    return mcp


def run_server(config: ServerConfig) -> None:
    """Run the server on the configured transport.

    stdio: stdin receives JSON-RPC requests, stdout sends responses.
    streamable_http: served on http_host:http_port.
    """
    configure_logging(config)

    get_db_manager(config.get_database_url()).init_database()
    mcp = create_server(config)

    # Set up signal handlers for graceful shutdown
    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        get_db_manager().close()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info(
        "Starting %s v%s on %s transport",
        config.server_name,
        config.server_version,
        config.transport,
    )
    try:
        if config.transport == "stdio":
            mcp.run(transport="stdio")
        else:
            mcp.run(transport="streamable-http", host=config.http_host, port=config.http_port)
    except Exception:
        logger.exception("Fatal error in MCP server")
        sys.exit(1)


def main() -> None:
    """Main entry point for the MCP server."""
    try:
        config = get_config()
        logger.info("=" * 60)
        logger.info("Course Library MCP Server")
        logger.info("Version: %s", config.server_version)
        logger.info("Transport: %s", config.transport)
        logger.info("Debug Mode: %s", config.debug)
        logger.info("=" * 60)

        run_server(config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to start MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
