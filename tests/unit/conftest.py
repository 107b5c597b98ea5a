"""Shared test fixtures for Astro AI unit tests."""

from typing import Any

import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, BaseMessage
from pydantic import Field

from astro_ai.agent.errors import ImageStoreError


class ScriptedChatModel(GenericFakeChatModel):
    """Replays scripted AIMessages and records the prompt of every call."""

    calls: list[list[BaseMessage]] = Field(default_factory=list)
    bound_tool_names: list[str] = Field(default_factory=list)
    error_message: str | None = None

    def bind_tools(self, tools, **kwargs):
        self.bound_tool_names = [t.name for t in tools]
        return self

    def _generate(self, messages, stop=None, run_manager=None, **kwargs):
        self.calls.append(list(messages))
        if self.error_message is not None:
            raise RuntimeError(self.error_message)
        return super()._generate(messages, stop=stop, run_manager=run_manager, **kwargs)


class FakeImageStore:
    """In-memory ImageStore that hands out predictable URLs."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def store(self, data: bytes, filename: str, mime_type: str) -> str:
        self.calls.append({"data": data, "filename": filename, "mime_type": mime_type})
        if self.error is not None:
            raise self.error
        return f"https://drive.google.com/uc?id=file-{len(self.calls)}"


def _tool_call_message(*calls: tuple[str, dict, str]) -> AIMessage:
    """AIMessage requesting the given (name, args, id) tool calls."""
    return AIMessage(
        content="",
        tool_calls=[
            {"name": name, "args": args, "id": call_id, "type": "tool_call"}
            for name, args, call_id in calls
        ],
    )


@pytest.fixture
def astro_args() -> dict[str, str]:
    return {
        "name": "Asha Rao",
        "dob": "1992-08-14",
        "tob": "06:45",
        "pob": "Pune, India",
        "gender": "female",
        "palmLeft": "https://drive.google.com/uc?id=file-1",
        "palmRight": "https://drive.google.com/uc?id=file-2",
    }


@pytest.fixture
def make_model():
    """Factory for ScriptedChatModel instances replaying the given responses."""

    def _make(*responses: AIMessage | str, error_message: str | None = None):
        return ScriptedChatModel(
            messages=iter(responses),
            error_message=error_message,
            disable_streaming=True,
        )

    return _make


@pytest.fixture
def image_store() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture
def failing_image_store() -> FakeImageStore:
    return FakeImageStore(error=ImageStoreError("Drive quota exceeded"))


@pytest.fixture
def make_tool_call():
    return _tool_call_message
