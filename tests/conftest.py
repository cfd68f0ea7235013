import json
import threading

import pytest

from symptom_assistant.application.conversation import SymptomConversationManager
from symptom_assistant.application.use_cases import (
    ConditionRefinementUseCase,
    GreetingClassifierUseCase,
    HospitalLookupUseCase,
    PrecautionUseCase,
    SymptomAnalysisUseCase,
)
from symptom_assistant.domain.models import Language


PHOTO = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD"

NOT_GREETING = {"is_greeting": False, "response": ""}

# Marker phrase in each prompt template -> call kind
ROUTES = [
    ("simple greeting", "greeting"),
    ("follow-up questions to ask the user", "analysis"),
    ("refined, small list", "refine"),
    ("provides precautions", "precautions"),
    ("real hospitals near", "hospitals"),
]


def prompt_text(messages):
    content = messages[-1]["content"]
    if isinstance(content, list):
        return "\n".join(chunk.get("text", "") for chunk in content if chunk.get("type") == "text")
    return content


class RoutingLLM:
    """Dummy LLM answering each prompt template with a scripted response.

    A response may be a dict/list (returned as JSON), a raw string, an exception
    instance (raised), or a callable taking the prompt text.
    """

    def __init__(self, **responses):
        self.responses = responses
        self.calls = []
        self._lock = threading.Lock()

    def generate_json(self, messages):
        prompt = prompt_text(messages)
        kind = next((k for marker, k in ROUTES if marker in prompt), "unknown")
        with self._lock:
            self.calls.append((kind, prompt, messages))

        response = self.responses.get(kind)
        if callable(response):
            response = response(prompt)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise AssertionError(f"Unexpected {kind} call")
        if isinstance(response, (dict, list)):
            return json.dumps(response)
        return response

    def kinds(self):
        return [kind for kind, _, _ in self.calls]

    def count(self, kind):
        return self.kinds().count(kind)

    def prompts(self, kind):
        return [prompt for k, prompt, _ in self.calls if k == kind]


def make_manager(llm, location=None, language=Language.EN, hospital_search=None):
    return SymptomConversationManager(
        greeting=GreetingClassifierUseCase(llm),
        analysis=SymptomAnalysisUseCase(llm),
        refinement=ConditionRefinementUseCase(llm),
        precautions=PrecautionUseCase(llm),
        hospital_search=hospital_search or HospitalLookupUseCase(llm),
        language=language,
        location=location,
    )


@pytest.fixture
def photo():
    return PHOTO
