import logging
from typing import Optional

from openai import AsyncOpenAI
import tiktoken
from tenacity import retry, wait_exponential, stop_after_attempt

logger = logging.getLogger(__name__)

JSON_RESPONSE_FORMAT = "json"


class OpenAIService:
    """Completion client used by every pipeline stage (one instance per model)"""

    def __init__(self, api_key: str, llm_model: str = "gpt-4o"):
        """
        Initialize OpenAI service with an async client

        Args:
            api_key: OpenAI API key
            llm_model: Model for text generation
        """
        self.async_client = AsyncOpenAI(api_key=api_key)
        self.llm_model = llm_model
        try:
            self.encoding = tiktoken.encoding_for_model(llm_model)
        except KeyError:
            self.encoding = tiktoken.get_encoding("o200k_base")
        logger.info(f"[OpenAIService] Initialized - LLM: {llm_model}")

    def count_tokens(self, text: str) -> int:
        """
        Count tokens in text for the configured model

        Args:
            text: Text to count tokens for

        Returns:
            Number of tokens
        """
        return len(self.encoding.encode(text))

    # ===================== TEXT GENERATION =====================

    @retry(wait=wait_exponential(multiplier=1, min=2, max=10), stop=stop_after_attempt(3), reraise=True)
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        response_format: Optional[str] = None,
    ) -> str:
        """
        Run one chat completion round trip

        Args:
            system_prompt: System message
            user_prompt: User message
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            response_format: "json" to force a JSON object, None for free text

        Returns:
            Generated text
        """
        kwargs = {
            "model": self.llm_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        if response_format == JSON_RESPONSE_FORMAT:
            kwargs["response_format"] = {"type": "json_object"}

        prompt_tokens = self.count_tokens(system_prompt) + self.count_tokens(user_prompt)
        try:
            response = await self.async_client.chat.completions.create(**kwargs)
        except Exception as e:
            logger.error(f"[OpenAIService] Error generating text ({self.llm_model}, ~{prompt_tokens} prompt tokens): {str(e)}")
            raise

        generated_text = response.choices[0].message.content or ""
        completion_tokens = response.usage.completion_tokens if response.usage else 0
        logger.info(f"[OpenAIService] {self.llm_model}: ~{prompt_tokens} prompt tokens -> {completion_tokens} completion tokens")
        return generated_text
