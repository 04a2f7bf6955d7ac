import json
import logging
import time
from typing import Any, Dict, Optional

import requests

from shared.core.exceptions import AIServiceError

logger = logging.getLogger(__name__)


class AIClient:
    """Thin client for an OpenAI-compatible chat completions endpoint.

    Every failure mode (network, HTTP status, malformed body, non JSON
    answer) surfaces as ``AIServiceError`` so callers have one thing to catch.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        model: str,
        timeout: float = 15,
        max_retries: int = 2,
        retry_delay: float = 1,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, system_prompt: str, user_content: str, temperature: float) -> Dict[str, Any]:
        return {
            "model": self.model,
            "temperature": temperature,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
        }

    @staticmethod
    def _parse_content(body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            content = body["choices"][0]["message"]["content"]
            parsed = json.loads(content)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise AIServiceError(f"Unexpected completion payload: {e}")

        if not isinstance(parsed, dict):
            raise AIServiceError("Completion content is not a JSON object")
        return parsed

    def complete_json(self, system_prompt: str, user_content: str, temperature: float = 0.3) -> Dict[str, Any]:
        """Send one chat completion and return the assistant's JSON answer as a dict."""
        if not self.api_key:
            raise AIServiceError("AI service is not configured (missing API key)")

        payload = self._build_payload(system_prompt, user_content, temperature)
        url = f"{self.base_url}/chat/completions"

        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.session.post(
                    url, headers=self._headers(), json=payload, timeout=self.timeout)
                if response.status_code in (401, 403):
                    # retrying will not fix credentials
                    raise AIServiceError(
                        f"AI service rejected credentials ({response.status_code})")
                response.raise_for_status()
                return self._parse_content(response.json())
            except AIServiceError:
                raise
            except (requests.RequestException, ValueError) as e:
                last_error = e
                logger.warning("AI request attempt %s/%s failed: %s",
                               attempt, self.max_retries, e)
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay)

        raise AIServiceError(f"AI service unavailable after {self.max_retries} attempts: {last_error}")
