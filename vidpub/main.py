"""FastAPI app entry for vidpub."""
import logging

from vidpub.config import settings
from vidpub.interfaces.api.app import app

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "vidpub.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
