import logging

from google import genai

from roominvoice.config import DraftingConfig, resolve_drafting_config
from roominvoice.core.errors import ConfigError
from roominvoice.services.drafting.service import DraftingService

logger = logging.getLogger(__name__)


class GeminiDraftingService(DraftingService):
    """DraftingService backed by the Google Gemini API."""

    def __init__(self, config: DraftingConfig | None = None, client=None):
        config = config or resolve_drafting_config()
        if client is None and not config.api_key:
            raise ConfigError("GEMINI_API_KEY is not defined in environment variables")
        self._model = config.model
        self._client = client or genai.Client(api_key=config.api_key)

    def generate(self, prompt: str) -> str:
        logger.info("Requesting invoice draft from %s", self._model)
        response = self._client.models.generate_content(
            model=self._model,
            contents=prompt,
        )
        return response.text or ""
