"""
Sequential Thinking MCP Server
Exposes the thinking engine as the `think` tool for step-by-step,
revisable and branching problem solving.
"""

import json
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from sequential_thinking.config import get_settings
from sequential_thinking.models import ThoughtInput
from sequential_thinking.services.thinking_engine import get_thinking_engine
from sequential_thinking.utils.logging import configure_logging, get_logger
from sequential_thinking.utils.types import Failure

logger = get_logger(__name__)

THINK_DESCRIPTION = (
    "A detailed tool for dynamic and reflective problem-solving through thoughts. "
    "This tool helps analyze problems through a flexible thinking process that can "
    "adapt and evolve. Each thought can build on, question, or revise previous "
    "insights as understanding deepens."
)

mcp = FastMCP("sequential-thinking")


def think(
    thought: Annotated[str, Field(description="Your current thinking step")],
    nextThoughtNeeded: Annotated[
        bool, Field(description="Whether another thought step is needed")
    ],
    thoughtNumber: Annotated[int, Field(description="Current thought number")],
    totalThoughts: Annotated[int, Field(description="Estimated total thoughts needed")],
    isRevision: Annotated[
        Optional[bool], Field(description="Whether this revises previous thinking")
    ] = None,
    revisesThought: Annotated[
        Optional[int], Field(description="Which thought is being reconsidered")
    ] = None,
    branchFromThought: Annotated[
        Optional[int], Field(description="Branching point thought number")
    ] = None,
    branchId: Annotated[Optional[str], Field(description="Branch identifier")] = None,
    needsMoreThoughts: Annotated[
        Optional[bool], Field(description="If more thoughts are needed")
    ] = None,
) -> str:
    """
    Record one thinking step and report session progress.

    Parameter names are camelCase because they form the tool's wire schema.

    Returns:
        Indented JSON with thoughtNumber, totalThoughts, nextThoughtNeeded,
        branches and thoughtHistoryLength

    Raises:
        ToolError: On invalid input or an unexpected processing fault
    """
    try:
        raw = ThoughtInput(
            thought=thought,
            thought_number=thoughtNumber,
            total_thoughts=totalThoughts,
            next_thought_needed=nextThoughtNeeded,
            is_revision=isRevision,
            revises_thought=revisesThought,
            branch_from_thought=branchFromThought,
            branch_id=branchId,
            needs_more_thoughts=needsMoreThoughts,
        )

        result = get_thinking_engine().process_thought(raw)

        if isinstance(result, Failure):
            raise ToolError(result.error)
        return json.dumps(result.value.to_dict(), indent=2)
    except ToolError:
        raise
    except Exception as e:
        logger.exception("Unexpected error in think tool", error=str(e))
        raise ToolError(f"Processing error: {e}") from e


def get_thought_history() -> str:
    """
    Return every accepted thought and the known branches.

    Returns:
        Indented JSON with thoughtHistoryLength, branches (id -> thought
        count) and thoughts in commit order
    """
    history, branches = get_thinking_engine().snapshot()
    return json.dumps(
        {
            "thoughtHistoryLength": len(history),
            "branches": branches,
            "thoughts": [t.to_dict() for t in history],
        },
        indent=2,
    )


mcp.tool(think, name="think", description=THINK_DESCRIPTION)
mcp.tool(
    get_thought_history,
    name="get_thought_history",
    description="Retrieve all recorded thoughts and branch summaries.",
)


def main() -> None:
    """Load settings, configure logging and serve the MCP tools."""
    # Route early log output to stderr before settings are known
    configure_logging()
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        app_env=settings.app_env,
        app_version=settings.app_version,
        json_format=settings.json_logs,
        thought_preview_chars=settings.log_thought_preview_chars,
    )

    logger.info(
        "Starting Sequential Thinking MCP server",
        transport=settings.mcp_transport,
        host=settings.host if settings.mcp_transport == "http" else None,
        port=settings.port if settings.mcp_transport == "http" else None,
    )

    if settings.mcp_transport == "http":
        mcp.run(transport="http", host=settings.host, port=settings.port)
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
