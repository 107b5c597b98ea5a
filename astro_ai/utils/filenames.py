"""Upload filename formatting."""

import re
from datetime import datetime

_WHITESPACE = re.compile(r"\s+")


def format_upload_filename(
    original_name: str, user_name: str, now: datetime | None = None
) -> str:
    """Prefix an uploaded file's name with the user's name and upload time.

    "Jane Doe", "left.jpg" at 14:05 on 3 Feb 2025 becomes
    "Jane_Doe_03-02-2025_2-05pm_left.jpg".
    """
    now = now or datetime.now()
    date = now.strftime("%d-%m-%Y")
    hours = now.hour % 12 or 12
    ampm = "pm" if now.hour >= 12 else "am"
    time = f"{hours}-{now.minute:02d}{ampm}"
    clean_user_name = _WHITESPACE.sub("_", user_name)
    return f"{clean_user_name}_{date}_{time}_{original_name}"
