"""Gemini API client wrapper."""

import logging

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

logger = logging.getLogger(__name__)


class GeminiClient:
    """Single-shot text generation with Google Gemini."""

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash") -> None:
        """
        Initialize Gemini client.

        Args:
            api_key: Google Gemini API key
            model_name: Model to use (default: gemini-2.5-flash)
        """
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)

    def generate_text(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_output_tokens: int = 2048,
    ) -> str:
        """
        Generate a free-text answer for a prompt.

        Args:
            prompt: Full prompt text
            temperature: Sampling temperature (0.0-1.0)
            max_output_tokens: Maximum tokens in response

        Returns:
            Response text
        """
        logger.info(f"Generating text with {self.model_name}")
        response = self.model.generate_content(
            prompt,
            generation_config=GenerationConfig(
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            ),
        )
        return response.text
