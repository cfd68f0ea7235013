import logging
from typing import List

from symptom_assistant.application.ports import LLMPort
from symptom_assistant.infrastructure.config import Settings


logger = logging.getLogger(__name__)


def _has_image(messages: List[dict]) -> bool:
    for message in messages:
        content = message.get("content")
        if isinstance(content, list) and any(chunk.get("type") == "image_url" for chunk in content):
            return True
    return False


class MistralLLMAdapter(LLMPort):
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self._client = None
        self._model = self.settings.mistral_model
        self._vision_model = self.settings.mistral_vision_model
        self._init_client()

    def _init_client(self):
        api_key = self.settings.mistral_api_key
        if not api_key:
            logger.error("Mistral API key is missing.")
            self._client = None
            return
        try:
            from mistralai import Mistral
            self._client = Mistral(api_key=api_key)
        except Exception as e:
            logger.exception("Failed to initialize Mistral client: %s", e)
            self._client = None

    def generate_json(self, messages: List[dict]) -> str:
        if not self._client:
            raise RuntimeError("Mistral client not initialized (missing API key or import error)")
        model = self._vision_model if _has_image(messages) else self._model
        try:
            response = self._client.chat.complete(
                model=model,
                messages=messages,
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content
            # Content may come back as a list of chunks
            if isinstance(content, list):
                content = "".join(getattr(chunk, "text", "") or "" for chunk in content)
            return content or ""
        except Exception as e:
            logger.exception("Mistral chat call failed (model=%s): %s", model, e)
            raise
