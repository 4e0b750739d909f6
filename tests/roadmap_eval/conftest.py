# tests/roadmap_eval/conftest.py

import os
import uuid
from pathlib import Path
from typing import Optional

import pytest
from dotenv import load_dotenv

from roadmap_pipeline.model import get_default_model

ARTIFACTS_DIR = Path("artifacts/roadmap_eval")

load_dotenv()


def _env(name: str) -> Optional[str]:
    v = os.getenv(name)
    return v.strip() if v and v.strip() else None


@pytest.fixture(scope="session")
def run_id() -> str:
    """Unique id for this pytest run; override with ROADMAP_EVAL_RUN_ID for stable paths in CI."""
    return _env("ROADMAP_EVAL_RUN_ID") or f"pytest-{uuid.uuid4().hex[:10]}"


@pytest.fixture(scope="session")
def artifacts_dir() -> Path:
    ARTIFACTS_DIR.mkdir(parents=True, exist_ok=True)
    return ARTIFACTS_DIR


@pytest.fixture(scope="session")
def llm():
    """Production model configuration. Skips the suite when no credential is set."""
    if not (_env("GOOGLE_AI_API_KEY") or _env("GOOGLE_API_KEY")):
        pytest.skip("No model credentials found. Set GOOGLE_AI_API_KEY or GOOGLE_API_KEY.")
    return get_default_model()
