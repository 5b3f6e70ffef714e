import asyncio
import google.generativeai as genai
import logging
from typing import Optional
from google.api_core import exceptions as google_exceptions
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
)
from promptlab.config import Settings, get_settings
from promptlab.exceptions import (
    ConfigurationError,
    RateLimitError,
    UpstreamAPIError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (ConnectionError, TimeoutError, google_exceptions.RetryError)


class GeminiServices:
    """Gemini API service"""

    def __init__(self, settings: Optional[Settings] = None, sleep=asyncio.sleep):
        self.settings = settings or get_settings()
        self.sleep = sleep

        self.safety_settings = [
            {
                "category": "HARM_CATEGORY_HARASSMENT",
                "threshold": "BLOCK_NONE"
            },
            {
                "category": "HARM_CATEGORY_HATE_SPEECH",
                "threshold": "BLOCK_NONE"
            },
            {
                "category": "HARM_CATEGORY_SEXUALLY_EXPLICIT",
                "threshold": "BLOCK_NONE"
            },
            {
                "category": "HARM_CATEGORY_DANGEROUS_CONTENT",
                "threshold": "BLOCK_NONE"
            }
        ]

    async def generate_use_case_text(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        """Single call for use case generation, no retry"""
        return await self._generate(
            prompt=prompt,
            system_instruction=system_instruction,
            temperature=self.settings.use_case_temperature,
            max_output_tokens=self.settings.use_case_max_tokens,
        )

    async def generate_with_retry(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Generate text for the evaluation path.

        Rate limits back off 1s, 2s, ... between attempts; transport failures
        wait a flat interval. Any other API error is raised immediately.
        """
        if temperature is None:
            temperature = self.settings.evaluation_temperature

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=self._wait_for,
            retry=retry_if_exception_type((RateLimitError, UpstreamTransportError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self.sleep,
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                return await self._generate(
                    prompt=prompt,
                    system_instruction=system_instruction,
                    temperature=temperature,
                    max_output_tokens=self.settings.evaluation_max_tokens,
                )

    def _wait_for(self, retry_state: RetryCallState) -> float:
        """Increasing delay after a rate limit, flat delay after a transport failure"""
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, RateLimitError):
            delay = retry_state.attempt_number * self.settings.rate_limit_backoff
            logger.info(f"Rate limited, retrying in {delay} seconds...")
            return delay
        remaining = self.settings.max_retries - retry_state.attempt_number
        logger.info(f"Request failed, retrying... ({remaining} attempts left)")
        return self.settings.transport_retry_wait

    async def _generate(
        self,
        prompt: str,
        system_instruction: Optional[str],
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """One outbound request, with provider errors mapped to our taxonomy"""
        if not self.settings.gemini_api_key:
            logger.error("GEMINI_API_KEY not configured")
            raise ConfigurationError("GEMINI_API_KEY not configured")

        genai.configure(api_key=self.settings.gemini_api_key)
        model = genai.GenerativeModel(
            self.settings.gemini_model,
            system_instruction=system_instruction
        )
        config = {
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
        }

        logger.debug("Prompt: " + prompt)

        try:
            response = await model.generate_content_async(
                prompt,
                generation_config=config,
                safety_settings=self.safety_settings
            )
        except google_exceptions.ResourceExhausted as e:
            logger.warning(f"Gemini rate limited: {e}")
            raise RateLimitError(str(e)) from e
        except google_exceptions.GoogleAPICallError as e:
            code = getattr(e, "code", None)
            status_code = int(code) if code is not None else None
            if status_code == 429:
                raise RateLimitError(str(e)) from e
            logger.error(f"Gemini API error {status_code}: {e.message}")
            raise UpstreamAPIError(status_code, str(e.message)) from e
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Gemini transport error: {e}")
            raise UpstreamTransportError(str(e)) from e

        if not response.parts:
            logger.error(f"Invalid response structure from Gemini: {response}")
            raise UpstreamAPIError(None, "Empty response from Gemini")

        text = response.text
        logger.info(f"Gemini generated {len(text)} characters")
        return text


# Singleton instance
_gemini_service = None

def get_gemini_service() -> GeminiServices:
    """
    Get or create GeminiServices singleton
    """

    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiServices()
    return _gemini_service
