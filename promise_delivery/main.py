import logging

from fastmcp import FastMCP

from promise_delivery.config import ConfigCache
from promise_delivery.server import register_tools

# LOGGING CONFIGURATION

config = ConfigCache.get_config()

logging.basicConfig(
    level=getattr(logging, config["log_level"], logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# INITIALIZE MCP SERVER

mcp = FastMCP("Promise Delivery Service")
register_tools(mcp)


# ============================================
# RUN SERVER
# ============================================

if __name__ == "__main__":
    logger.info("Starting Promise Delivery Service")
    logger.info(
        f"Cutoff {config['cutoff_hour']}:00 {config['timezone']}, origin ZIP {config['origin_zip']}"
    )

    try:
        mcp.run(transport="http")

    except Exception as e:
        logger.critical(f"Failed to start server: {str(e)}")
        raise
