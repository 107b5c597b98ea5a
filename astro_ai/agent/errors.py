"""Error taxonomy for the reading pipeline."""


class ReadingError(Exception):
    """Base class for failures while producing a reading."""


class ImageStoreError(ReadingError):
    """Uploading or sharing a palm image failed."""


class AgentError(ReadingError):
    """The agent loop could not produce a final answer."""


class MalformedToolCallError(AgentError):
    """The model called a tool with an unknown name or invalid arguments."""

    def __init__(self, tool_name: str, detail: str) -> None:
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"Malformed call to tool '{tool_name}': {detail}")


class ToolRoundLimitError(AgentError):
    """The model kept requesting tools past the configured round limit."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(
            f"Agent exceeded {limit} tool rounds without producing a final answer"
        )


class InvalidSubmissionError(ReadingError):
    """The request is missing images or biodata; reported to the client as 400."""
