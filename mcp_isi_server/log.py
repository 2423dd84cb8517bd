import os
import sys

from loguru import logger

# stdout carries the MCP stdio transport, so logs go to stderr only
logger.remove()
logger.add(sys.stderr, level=os.getenv("MCP_ISI_SERVER_LOG_LEVEL", "INFO").upper())

__all__ = ["logger"]
