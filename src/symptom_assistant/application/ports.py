from typing import List, Protocol

from symptom_assistant.domain.models import Geolocation, Hospital, Language


class HospitalSearchPort(Protocol):
    def find_nearby(self, location: Geolocation, language: Language, limit: int = 3) -> List[Hospital]:
        ...


class LLMPort(Protocol):
    def generate_json(self, messages: List[dict]) -> str:
        """
        Accepts chat-style messages and returns the raw model text, expected to be JSON.
        A user message may carry a list of text and image_url chunks instead of a string.
        """
        ...
