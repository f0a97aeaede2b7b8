"""
Jenkins Commands MCP Server

Exposes the chat-style Jenkins commands (list jobs, trigger builds) as MCP
tools, so a chat bot or AI client can forward user text and relay the reply.

Transport: Streamable HTTP by default (MCP_TRANSPORT=http, host 0.0.0.0, port 8000).
           Set MCP_TRANSPORT=stdio to use stdio instead (e.g. for Cursor/Claude Desktop).
Logs:      All application logs go to stderr to avoid corrupting the JSON-RPC stream.
"""

import logging
import os
import sys

from dotenv import load_dotenv
from fastmcp import FastMCP

from utils import commands

load_dotenv()

# Route all library and application logs to stderr, never stdout.
logging.basicConfig(
    stream=sys.stderr,
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("jenkins-commands")

mcp = FastMCP(
    "Jenkins Commands",
    instructions=(
        "You relay chat commands to a Jenkins server. "
        "Use list_jobs to show numbered jobs (the filter is a case-insensitive regex "
        "over state + name, e.g. 'fail' for failing jobs). "
        "Use build_job with a job number from list_jobs or an exact job name; "
        "parameters are 'key=value, key=value'. "
        "Use jenkins_command to pass raw chat text such as 'jenkins build 3, BRANCH=main' "
        "and return its reply verbatim."
    ),
)


@mcp.tool
def list_jobs(pattern: str = "") -> str:
    """List all Jenkins jobs, including those nested in folders, as
    '[n] STATE name' lines. STATE is DISA, FAIL or SUCC.

    Args:
        pattern: Optional case-insensitive regex matched against state + name.
    """
    return commands.jenkins_list(pattern or None)


@mcp.tool
def build_job(job: str, parameters: str = "") -> str:
    """Trigger a build by job number (from list_jobs) or exact job name.

    Args:
        job: Job number or name.
        parameters: Optional 'key=value, key=value' build parameters.
    """
    return commands.jenkins_build(job, parameters or None)


@mcp.tool
def jenkins_command(command: str) -> str:
    """Run a chat command ('jenkins list <filter>', 'jenkins build <job>[, k=v]',
    'jenkins help') and return the reply text.

    Args:
        command: The chat message addressed to the bot.
    """
    reply = commands.handle_command(command)
    if reply is None:
        logger.debug("Unrecognised command: %r", command)
        return f"Unrecognised command '{command}'.\n{commands.help_text()}"
    return reply


def main() -> None:
    transport = os.getenv("MCP_TRANSPORT", "http")
    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8000"))

    if transport == "stdio":
        mcp.run(transport="stdio", show_banner=False)
    else:
        print(
            f"Jenkins Commands MCP server starting\n"
            f"  Local:    http://127.0.0.1:{port}/mcp",
            file=sys.stderr,
        )
        mcp.run(transport=transport, host=host, port=port, show_banner=False)


if __name__ == "__main__":
    main()
