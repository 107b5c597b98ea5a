"""LangGraph agent graph — reason → tools → reason loop for astrology readings."""

from __future__ import annotations

import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)
from langchain_core.tools import BaseTool
from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph
from pydantic import ValidationError

from astro_ai.agent.errors import (
    AgentError,
    MalformedToolCallError,
    ToolRoundLimitError,
)
from astro_ai.agent.prompts import ASTROLOGER_SYSTEM_PROMPT, build_reading_request
from astro_ai.agent.state import AgentState
from astro_ai.schemas.reading import UserSubmission
from astro_ai.tools import ALL_TOOLS

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOOL_ROUNDS = 5


def _should_use_tools(state: AgentState) -> str:
    """Edge function: route to tools if the last message requested any."""
    last = state["messages"][-1]
    if getattr(last, "tool_calls", None) or getattr(last, "invalid_tool_calls", None):
        return "tools"
    return END


def message_text(message: BaseMessage) -> str:
    """Flatten message content (plain string or list of content blocks) to text."""
    content = message.content
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def extract_final_text(messages: list[BaseMessage]) -> str:
    """Return the text of the most recent model answer that is not a tool call."""
    for msg in reversed(messages):
        if isinstance(msg, AIMessage) and not msg.tool_calls:
            text = message_text(msg)
            if text:
                return text
    raise AgentError("Agent finished without a final answer")


def _build_tool_node(tools: list[BaseTool], max_tool_rounds: int):
    """Build the tool execution node.

    Calls run sequentially in the order the model listed them, so the
    ToolMessages land in that same order. Bad calls raise instead of being
    reported back to the model.
    """
    tools_by_name = {t.name: t for t in tools}

    async def execute_tools(state: AgentState) -> dict[str, Any]:
        rounds = state.get("tool_rounds", 0)
        if rounds >= max_tool_rounds:
            logger.warning("Tool round limit %d reached, aborting", max_tool_rounds)
            raise ToolRoundLimitError(max_tool_rounds)

        last = state["messages"][-1]
        if not isinstance(last, AIMessage):
            raise AgentError("Tool execution requested without a model message")

        if last.invalid_tool_calls:
            bad = last.invalid_tool_calls[0]
            raise MalformedToolCallError(
                bad.get("name") or "<unknown>",
                bad.get("error") or "arguments could not be parsed",
            )

        results: list[ToolMessage] = []
        for tc in last.tool_calls:
            selected = tools_by_name.get(tc["name"])
            if selected is None:
                raise MalformedToolCallError(tc["name"], "no such tool")
            try:
                result = await selected.ainvoke({**tc, "type": "tool_call"})
            except ValidationError as e:
                raise MalformedToolCallError(tc["name"], str(e)) from e
            logger.info("Executed tool %s (call %s)", tc["name"], tc.get("id"))
            results.append(result)

        return {"messages": results, "tool_rounds": rounds + 1}

    return execute_tools


def build_graph(
    model: BaseChatModel,
    tools: list[BaseTool] | None = None,
    max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
) -> CompiledStateGraph:
    """Build the agent graph with the given model and tools.

    Args:
        model: Chat model supporting bind_tools (ChatAnthropic in production).
        tools: List of LangChain tools to bind. Defaults to ALL_TOOLS.
        max_tool_rounds: Tool rounds allowed before the loop fails closed.
    """
    tool_list = tools if tools is not None else ALL_TOOLS
    model_with_tools = model.bind_tools(tool_list)

    async def reason(state: AgentState) -> dict:
        """Invoke the LLM with system prompt + conversation history."""
        system = SystemMessage(content=ASTROLOGER_SYSTEM_PROMPT)
        messages = [system] + state["messages"]
        logger.info("Calling model with %d messages", len(messages))
        response = await model_with_tools.ainvoke(messages)
        return {"messages": [response]}

    graph = StateGraph(AgentState)
    graph.add_node("reason", reason)
    graph.add_node("tools", _build_tool_node(tool_list, max_tool_rounds))
    graph.set_entry_point("reason")
    graph.add_conditional_edges(
        "reason",
        _should_use_tools,
        {"tools": "tools", END: END},
    )
    graph.add_edge("tools", "reason")

    # One reason step per round plus the final answer; the round limit,
    # not LangGraph's recursion guard, is what ends a runaway loop.
    recursion_limit = 2 * max_tool_rounds + 3
    return graph.compile().with_config(recursion_limit=recursion_limit)


async def run_reading(graph: CompiledStateGraph, submission: UserSubmission) -> str:
    """Run the agent loop for one submission and return the report text."""
    input_state = {
        "messages": [
            HumanMessage(content=build_reading_request(submission.model_dump()))
        ],
        "tool_rounds": 0,
    }
    result = await graph.ainvoke(input_state)
    return extract_final_text(result["messages"])
