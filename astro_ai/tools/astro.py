"""Astro_AI LangChain tool: echoes the user's birth details as a labeled block."""

from langchain_core.tools import tool
from pydantic import BaseModel, ConfigDict, Field

TOOL_NAME = "Astro_AI"


class AstroToolInput(BaseModel):
    """Arguments the model must supply when calling Astro_AI."""

    model_config = ConfigDict(strict=True)

    name: str = Field(description="name of the user")
    dob: str = Field(description="date of birth of the user")
    tob: str = Field(description="time of birth of the user")
    pob: str = Field(description="place of birth of the user")
    gender: str = Field(description="gender of the user")
    palmLeft: str = Field(description="palm image of the user")
    palmRight: str = Field(description="palm image of the user")


# (label, field) in output order
_FIELDS = [
    ("Name", "name"),
    ("Date of Birth", "dob"),
    ("Time of Birth", "tob"),
    ("Place of Birth", "pob"),
    ("Gender", "gender"),
    ("Palm Image 1", "palmLeft"),
    ("Palm Image 2", "palmRight"),
]


def format_user_info(
    name: str,
    dob: str,
    tob: str,
    pob: str,
    gender: str,
    palmLeft: str,
    palmRight: str,
) -> str:
    values = {
        "name": name,
        "dob": dob,
        "tob": tob,
        "pob": pob,
        "gender": gender,
        "palmLeft": palmLeft,
        "palmRight": palmRight,
    }
    lines = ["User Info:"]
    lines.extend(f"- {label}: {values[field]}" for label, field in _FIELDS)
    return "\n".join(lines)


@tool(TOOL_NAME, args_schema=AstroToolInput)
def astro_ai(
    name: str,
    dob: str,
    tob: str,
    pob: str,
    gender: str,
    palmLeft: str,
    palmRight: str,
) -> str:
    """Astrology prediction system."""
    return format_user_info(
        name=name,
        dob=dob,
        tob=tob,
        pob=pob,
        gender=gender,
        palmLeft=palmLeft,
        palmRight=palmRight,
    )
