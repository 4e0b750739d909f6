# src/roadmap_pipeline/model.py

import logging
import os

from langchain.chat_models import init_chat_model

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_MODEL_PROVIDER = "google_genai"


def get_default_model():
    """Build the shared chat model handle.

    Created once at startup and reused by both stages; each stage picks its own
    temperature per call through the ``temperature`` configurable field.
    """
    model_name = os.getenv("ROADMAP_MODEL", DEFAULT_MODEL)
    provider = os.getenv("ROADMAP_MODEL_PROVIDER", DEFAULT_MODEL_PROVIDER)

    kwargs = {}
    api_key = os.getenv("GOOGLE_AI_API_KEY")
    if provider == "google_genai" and api_key:
        kwargs["google_api_key"] = api_key

    logger.debug("Initialising chat model %s (%s)", model_name, provider)
    model = init_chat_model(
        model=model_name,
        model_provider=provider,
        temperature=0.2,
        configurable_fields=("temperature",),
        **kwargs,
    )
    return model
