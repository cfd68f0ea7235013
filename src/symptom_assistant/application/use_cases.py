import json
import logging
from typing import Any, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from symptom_assistant.application.errors import MissingSymptomInputError, ModelResponseError
from symptom_assistant.application.ports import LLMPort
from symptom_assistant.application.prompts import (
    GREETING_SCHEMA,
    GREETING_TEMPLATE,
    JSON_ONLY,
    NEARBY_HOSPITALS_SCHEMA,
    NEARBY_HOSPITALS_TEMPLATE,
    PHOTO_LINE,
    PRECAUTIONS_SCHEMA,
    PRECAUTIONS_TEMPLATE,
    REFINE_CONDITIONS_SCHEMA,
    REFINE_CONDITIONS_TEMPLATE,
    SYMPTOM_ANALYSIS_SCHEMA,
    SYMPTOM_ANALYSIS_TEMPLATE,
    SYSTEM_PROMPT,
)
from symptom_assistant.application.schemas import (
    GreetingResult,
    RefinedCondition,
    RefinementResult,
    SymptomAnalysisResult,
)
from symptom_assistant.domain.models import (
    LANGUAGE_NAMES,
    Geolocation,
    Hospital,
    Language,
    Precautions,
    SymptomReport,
)
from symptom_assistant.domain.rules import NO_FOLLOW_UP_ANSWERS


logger = logging.getLogger(__name__)

FALLBACK_SYMPTOMS = "Visual symptoms"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def language_label(language: Language) -> str:
    return f"{LANGUAGE_NAMES[language]} ({language.value})"


def _span(raw: str, opening: str, closing: str) -> Optional[Tuple[int, str]]:
    start, end = raw.find(opening), raw.rfind(closing)
    if start == -1 or end < start:
        return None
    return start, raw[start:end + 1]


def extract_json(raw: Optional[str], allow_array: bool = False) -> Any:
    """Parse the JSON payload of a model reply, ignoring any text wrapped around it.

    The object span (first `{` to last `}`) is tried by default. With
    `allow_array`, the array span is also tried; whichever span opens first
    goes first, so a bare array is not mistaken for its first element.
    """
    raw = (raw or "").strip()
    spans = [_span(raw, "{", "}")]
    if allow_array:
        spans.append(_span(raw, "[", "]"))
    candidates = [text for _, text in sorted(s for s in spans if s is not None)]

    error: Optional[ValueError] = None
    for candidate in candidates:
        try:
            return json.loads(candidate)
        except ValueError as e:
            error = error or e
    if error is not None:
        raise error
    return json.loads(raw)


def build_messages(task_prompt: str, schema_instructions: str, photo_data_uri: Optional[str] = None) -> List[dict]:
    user_content: Any = task_prompt
    if photo_data_uri:
        user_content = [
            {"type": "text", "text": task_prompt},
            {"type": "image_url", "image_url": photo_data_uri},
        ]
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f"{JSON_ONLY}\n{schema_instructions}"},
        {"role": "user", "content": user_content},
    ]


def request_model(llm: LLMPort, messages: List[dict], schema: Type[SchemaT]) -> SchemaT:
    """Issue one model call and validate the reply against `schema`. No retries."""
    try:
        raw = llm.generate_json(messages)
    except Exception as e:
        raise ModelResponseError(f"Model call failed: {e}") from e

    try:
        return schema.model_validate(extract_json(raw))
    except (ValueError, ValidationError) as e:
        logger.warning("%s JSON invalid: %s. Raw: %s", schema.__name__, e, (raw or "")[:200])
        raise ModelResponseError(f"Invalid {schema.__name__} response") from e


class GreetingClassifierUseCase:
    def __init__(self, llm: LLMPort):
        self.llm = llm

    def classify(self, text: str, language: Language) -> GreetingResult:
        """Never raises: any failure is treated as 'not a greeting'."""
        if not text or not text.strip():
            return GreetingResult()

        prompt = GREETING_TEMPLATE.format(language=language_label(language), user_input=text.strip())
        try:
            return request_model(self.llm, build_messages(prompt, GREETING_SCHEMA), GreetingResult)
        except ModelResponseError as e:
            logger.warning("Greeting classification failed, continuing with symptom analysis: %s", e)
            return GreetingResult()


class SymptomAnalysisUseCase:
    def __init__(self, llm: LLMPort):
        self.llm = llm

    def analyze(self, report: SymptomReport) -> SymptomAnalysisResult:
        if not report.has_input:
            raise MissingSymptomInputError("Please provide a description or a photo of your symptoms.")

        prompt = SYMPTOM_ANALYSIS_TEMPLATE.format(
            language=language_label(report.language),
            symptoms=report.symptoms or FALLBACK_SYMPTOMS,
            photo_line=PHOTO_LINE if report.photo_data_uri else "",
        )
        messages = build_messages(prompt, SYMPTOM_ANALYSIS_SCHEMA, report.photo_data_uri)
        result = request_model(self.llm, messages, SymptomAnalysisResult)
        logger.info("Symptom analysis produced %d follow-up question(s)", len(result.follow_up_questions))
        return result


class ConditionRefinementUseCase:
    def __init__(self, llm: LLMPort):
        self.llm = llm

    def refine(self, report: SymptomReport, follow_up_answers: str) -> List[RefinedCondition]:
        if not report.has_input:
            raise MissingSymptomInputError("Missing symptoms to refine.")

        prompt = REFINE_CONDITIONS_TEMPLATE.format(
            language=language_label(report.language),
            symptoms=report.symptoms or FALLBACK_SYMPTOMS,
            photo_line=PHOTO_LINE if report.photo_data_uri else "",
            follow_up_answers=follow_up_answers.strip() or NO_FOLLOW_UP_ANSWERS,
        )
        messages = build_messages(prompt, REFINE_CONDITIONS_SCHEMA, report.photo_data_uri)
        result = request_model(self.llm, messages, RefinementResult)
        return result.conditions


class PrecautionUseCase:
    def __init__(self, llm: LLMPort):
        self.llm = llm

    def recommend(self, condition: str, symptoms: Optional[str], language: Language) -> Precautions:
        if not condition or not condition.strip():
            raise ValueError("Condition is required to suggest precautions.")

        prompt = PRECAUTIONS_TEMPLATE.format(
            language=language_label(language),
            condition=condition.strip(),
            symptoms=(symptoms or "").strip() or FALLBACK_SYMPTOMS,
        )
        return request_model(self.llm, build_messages(prompt, PRECAUTIONS_SCHEMA), Precautions)


class HospitalLookupUseCase:
    """Asks the model for real hospitals near a location. Best effort: always returns a list."""

    def __init__(self, llm: LLMPort):
        self.llm = llm

    def find_nearby(self, location: Geolocation, language: Language, limit: int = 3) -> List[Hospital]:
        prompt = NEARBY_HOSPITALS_TEMPLATE.format(
            limit=limit,
            latitude=location.latitude,
            longitude=location.longitude,
            language=language_label(language),
        )
        try:
            raw = self.llm.generate_json(build_messages(prompt, NEARBY_HOSPITALS_SCHEMA))
        except Exception as e:
            logger.warning("Hospital lookup call failed: %s", e)
            return []

        try:
            data = extract_json(raw, allow_array=True)
        except ValueError as e:
            logger.error("Could not parse hospital data from model: %s", e)
            return []

        # Accept a bare array as well as {"hospitals": [...]}
        if isinstance(data, dict):
            data = data.get("hospitals") or []
        if not isinstance(data, list):
            logger.error("Unexpected hospital payload type: %s", type(data).__name__)
            return []

        hospitals: List[Hospital] = []
        for item in data:
            try:
                hospitals.append(Hospital.model_validate(item))
            except ValidationError:
                logger.debug("Skipping malformed hospital entry: %s", item)
        return hospitals[:limit]
