# =============================================================================
# main.py  —  Entry Point for the IcePanel MCP Server
# =============================================================================
#
# HOW TO RUN:
#   icepanel-mcp-server API_KEY=... ORGANIZATION_ID=...
#   (or set them in the environment / a .env file and run without arguments)
#
# WHAT HAPPENS:
#   1. .env is loaded into the environment (python-dotenv)
#   2. KEY=value arguments override the environment
#   3. Settings are built; a missing API_KEY or ORGANIZATION_ID stops here
#   4. The FastMCP server is built and served over stdio until the client
#      disconnects
# =============================================================================

import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from core.config import load_settings
from core.errors import ConfigurationError
from core.icepanel import IcePanelClient
from tools.mcp_server import create_server

logger = logging.getLogger("icepanel")


def main(argv: Optional[Sequence[str]] = None) -> None:
    # Log to STDERR; STDOUT is the MCP transport.
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    load_dotenv()

    try:
        settings = load_settings(sys.argv[1:] if argv is None else argv)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    logger.info("Starting IcePanel MCP Server against %s", settings.api_base_url)

    with IcePanelClient(settings) as client:
        mcp = create_server(settings, client)
        mcp.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
