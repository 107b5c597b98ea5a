"""Run the API with uvicorn: ``python -m astro_ai``."""

import uvicorn

from astro_ai.config import settings

if __name__ == "__main__":
    uvicorn.run("astro_ai.main:app", host=settings.host, port=settings.port)
