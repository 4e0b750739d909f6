# src/roadmap_pipeline/gateway.py
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional

from roadmap_pipeline.errors import UpstreamFailure

logger = logging.getLogger(__name__)


def _message_text(message: Any) -> Optional[str]:
    """Return the text of a chat message exactly as the model produced it."""
    content = getattr(message, "content", message)
    if content is None or isinstance(content, str):
        return content
    if isinstance(content, list):
        # Some providers return content as a list of typed parts
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text") or "")
        return "".join(parts)
    return str(content)


class ModelGateway:
    """Single schema-constrained completion call against the chat model.

    Hands back the raw text untouched; interpreting it is the parser's job.
    Every client-side failure is re-raised as UpstreamFailure.
    """

    def __init__(self, llm):
        self._llm = llm

    def _runnable(self, schema: Dict[str, Any]):
        # include_raw keeps the untouched model message next to LangChain's own parse attempt
        return self._llm.with_structured_output(
            copy.deepcopy(schema),
            method="json_schema",
            include_raw=True,
        )

    @staticmethod
    def _config(temperature: float) -> Dict[str, Any]:
        return {"configurable": {"temperature": temperature}}

    @staticmethod
    def _raw_text(result: Any) -> Optional[str]:
        raw = result.get("raw") if isinstance(result, dict) else result
        return _message_text(raw)

    def complete(self, prompt: str, schema: Dict[str, Any], temperature: float) -> Optional[str]:
        try:
            result = self._runnable(schema).invoke(prompt, config=self._config(temperature))
        except Exception as e:
            logger.error("Model call failed: %s", e)
            raise UpstreamFailure(f"Model call failed: {e}") from e
        return self._raw_text(result)

    async def acomplete(self, prompt: str, schema: Dict[str, Any], temperature: float) -> Optional[str]:
        try:
            result = await self._runnable(schema).ainvoke(prompt, config=self._config(temperature))
        except Exception as e:
            logger.error("Model call failed: %s", e)
            raise UpstreamFailure(f"Model call failed: {e}") from e
        return self._raw_text(result)
