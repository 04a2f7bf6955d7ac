import logging
from typing import Any, Dict

from shared.core.config import settings
from shared.core.exceptions import AIServiceError
from shared.utils.ai_client import AIClient
from ..enum.guest_services_enum import MaintenanceCategory, MaintenancePriority

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK_LENGTH = 100

MAINTENANCE_SYSTEM_PROMPT = """You are a hotel maintenance categorization assistant for Ethiopian hotels. Analyze maintenance requests and categorize them, then translate to Amharic.

Categories:
- hvac: Air conditioning, heating, ventilation issues
- plumbing: Water leaks, toilet problems, shower issues
- electrical: Light problems, outlet issues, power problems
- furniture: Broken furniture, damaged fixtures
- cleaning: Cleaning requests, housekeeping issues
- appliances: TV, fridge, microwave issues
- other: Anything that doesn't fit above

Priority levels:
- urgent: Safety issues, no water/power, severe problems
- high: Significant discomfort but not dangerous
- medium: Moderate issues that need attention
- low: Minor issues, cosmetic problems

Respond in JSON format with:
{
  "category": "...",
  "priority": "...",
  "summary": "...",
  "summary_amharic": "...",
  "message_amharic": "..."
}

The summary should be a brief professional description in English (1-2 sentences).
The summary_amharic should be the same professional summary translated to Amharic.
The message_amharic should be the original user message translated to Amharic."""

INQUIRY_SYSTEM_PROMPT = """You are a hotel inquiry assistant for Ethiopian hotels.
You receive messages from potential guests who want to inquire about booking rooms, services, pricing, or general information.

Your tasks:
1. Detect the original language of the message
2. Translate the message to English (if not already in English)
3. Translate the message to Amharic (if not already in Amharic)
4. Create a brief summary of the inquiry in English

Respond in JSON format with:
{
  "message_english": "...",
  "message_amharic": "...",
  "original_language": "...",
  "summary": "..."
}

The summary should be a brief professional description in English (1-2 sentences) of what the person is inquiring about.
The original_language should be the detected language code (e.g., "en", "am", "es", etc.)."""


class MessageAnalyzer:
    """Classifies and translates guest messages; never raises to the caller."""

    def __init__(self, client: AIClient):
        self.client = client

    @staticmethod
    def maintenance_fallback(message: str) -> Dict[str, Any]:
        return {
            "category": MaintenanceCategory.OTHER,
            "priority": MaintenancePriority.MEDIUM,
            "summary": message[:SUMMARY_FALLBACK_LENGTH],
            "summary_amharic": message[:SUMMARY_FALLBACK_LENGTH],
            "message_amharic": message,
        }

    @staticmethod
    def inquiry_fallback(message: str) -> Dict[str, Any]:
        return {
            "message_english": message,
            "message_amharic": message,
            "original_language": "unknown",
            "summary": message[:SUMMARY_FALLBACK_LENGTH],
        }

    def categorize_maintenance(self, message: str) -> Dict[str, Any]:
        fallback = self.maintenance_fallback(message)
        try:
            parsed = self.client.complete_json(MAINTENANCE_SYSTEM_PROMPT, message)
        except AIServiceError as e:
            logger.warning("Maintenance categorization failed, using defaults: %s", e)
            return fallback

        try:
            category = MaintenanceCategory(str(parsed.get("category", "")).lower())
        except ValueError:
            category = MaintenanceCategory.OTHER

        try:
            priority = MaintenancePriority(str(parsed.get("priority", "")).lower())
        except ValueError:
            priority = MaintenancePriority.MEDIUM

        summary = parsed.get("summary") or fallback["summary"]
        return {
            "category": category,
            "priority": priority,
            "summary": summary,
            "summary_amharic": parsed.get("summary_amharic") or summary,
            "message_amharic": parsed.get("message_amharic") or message,
        }

    def translate_inquiry(self, message: str, name: str) -> Dict[str, Any]:
        fallback = self.inquiry_fallback(message)
        try:
            parsed = self.client.complete_json(
                INQUIRY_SYSTEM_PROMPT, f"Name: {name}\nMessage: {message}")
        except AIServiceError as e:
            logger.warning("Inquiry translation failed, using defaults: %s", e)
            return fallback

        return {key: parsed.get(key) or default for key, default in fallback.items()}


def get_message_analyzer() -> MessageAnalyzer:
    client = AIClient(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.AI_BASE_URL,
        model=settings.AI_MODEL,
        timeout=settings.AI_TIMEOUT_SECONDS,
        max_retries=settings.AI_MAX_RETRIES,
    )
    return MessageAnalyzer(client)
