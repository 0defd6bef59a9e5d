from contextlib import asynccontextmanager
import logging

from resume_ai.ai.factory import build_generative_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    client = build_generative_client()
    app.state.generative_client = client
    logger.info("generative_client_ready provider=%s", getattr(client, "name", None))
    yield
    app.state.generative_client = None
