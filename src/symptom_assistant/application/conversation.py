import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from symptom_assistant.application.conversation_state import (
    Action,
    EpisodeContext,
    Transition,
    on_episode_complete,
    on_questions_ready,
    on_user_message,
)
from symptom_assistant.application.errors import ConversationBusyError, MissingSymptomInputError
from symptom_assistant.application.ports import HospitalSearchPort
from symptom_assistant.application.schemas import AssistantReply, RefinedCondition
from symptom_assistant.application.use_cases import (
    ConditionRefinementUseCase,
    GreetingClassifierUseCase,
    PrecautionUseCase,
    SymptomAnalysisUseCase,
)
from symptom_assistant.domain.locales import get_translations, resolve_language
from symptom_assistant.domain.models import (
    ConditionCandidate,
    ConversationState,
    Geolocation,
    Hospital,
    Language,
    Precautions,
    SymptomReport,
)


logger = logging.getLogger(__name__)


class SymptomConversationManager:
    """Drives one diagnostic episode at a time: greeting, analysis, follow-ups, refinement."""

    def __init__(
        self,
        greeting: GreetingClassifierUseCase,
        analysis: SymptomAnalysisUseCase,
        refinement: ConditionRefinementUseCase,
        precautions: PrecautionUseCase,
        hospital_search: HospitalSearchPort,
        language: Language = Language.EN,
        location: Optional[Geolocation] = None,
        max_workers: int = 4,
    ):
        self.greeting = greeting
        self.analysis = analysis
        self.refinement = refinement
        self.precautions = precautions
        self.hospital_search = hospital_search
        self.max_workers = max(1, max_workers)
        self._location = location
        self._busy = False
        self.set_language(language)
        self.start_new()

    def start_new(self):
        self.state = ConversationState.IDLE
        self.context: Optional[EpisodeContext] = None

    def set_language(self, language):
        self.language = resolve_language(language)
        self.translations = get_translations(self.language)

    @property
    def location(self) -> Optional[Geolocation]:
        return self._location

    def capture_location(self, location: Optional[Geolocation]) -> None:
        """Record the session geolocation. The first captured value is kept for the whole session."""
        if self._location is None and location is not None:
            self._location = location
            logger.info("Session location captured")

    @property
    def busy(self) -> bool:
        return self._busy

    def handle_message(self, text: Optional[str] = None, photo_data_uri: Optional[str] = None) -> AssistantReply:
        """Process one user turn and return what to show next."""
        if self._busy:
            raise ConversationBusyError(self.translations["busy"])

        self._busy = True
        try:
            if photo_data_uri:
                if self.state != ConversationState.IDLE:
                    logger.info("Photo received mid-episode; starting a new episode")
                    self.start_new()
                return self._start_episode(text, photo_data_uri)

            transition = on_user_message(self.state, self.context, text or "", self.translations)
            if transition.action == Action.START_EPISODE:
                return self._start_episode(text, None)

            self._apply(transition)
            if transition.action == Action.REFINE:
                return self._refine(transition.context)
            return self._reply(transition.prompts)
        finally:
            self._busy = False

    def _apply(self, transition: Transition):
        self.state = transition.state
        self.context = transition.context

    def _reply(self, messages: List[str], conditions=None, is_error: bool = False) -> AssistantReply:
        return AssistantReply(messages=messages, conditions=conditions, state=self.state, is_error=is_error)

    def _start_episode(self, text: Optional[str], photo_data_uri: Optional[str]) -> AssistantReply:
        symptoms = text
        if photo_data_uri and not (text and text.strip()):
            symptoms = self.translations["visual_symptoms"]

        try:
            report = SymptomReport(symptoms=symptoms, photo_data_uri=photo_data_uri, language=self.language)
        except ValueError as e:
            logger.warning("Rejected symptom report: %s", e)
            return self._reply([self.translations["missing_input"]], is_error=True)

        if report.symptoms and not report.photo_data_uri:
            greeting = self.greeting.classify(report.symptoms, self.language)
            if greeting.is_greeting:
                return self._reply([greeting.response or self.translations["initial_bot_message"]])

        try:
            result = self.analysis.analyze(report)
        except MissingSymptomInputError as e:
            logger.info("Symptom analysis rejected: %s", e)
            return self._reply([self.translations["missing_input"]], is_error=True)
        except Exception as e:
            logger.exception("Error analyzing symptoms: %s", e)
            self.start_new()
            return self._reply([self.translations["error_message"]], is_error=True)

        leading = [result.acknowledgement] if result.acknowledgement else []
        transition = on_questions_ready(EpisodeContext(report=report, location=self._location), result.follow_up_questions)
        self._apply(transition)
        if transition.action == Action.REFINE:
            return self._refine(transition.context, leading)
        return self._reply(leading + transition.prompts)

    def _refine(self, context: EpisodeContext, leading: Optional[List[str]] = None) -> AssistantReply:
        messages = list(leading or [])
        try:
            candidates = self.refinement.refine(context.report, context.transcript())
            conditions = self._enrich(candidates, context)
        except Exception as e:
            logger.exception("Error refining conditions: %s", e)
            messages.append(self.translations["error_message"])
            return self._complete(messages, None, is_error=True)
        return self._complete(messages, conditions)

    def _complete(self, messages: List[str], conditions, is_error: bool = False) -> AssistantReply:
        self._apply(on_episode_complete())
        return self._reply(messages, conditions, is_error)

    def _enrich(self, candidates: List[RefinedCondition], context: EpisodeContext) -> List[ConditionCandidate]:
        """Attach precautions to every candidate and hospitals to emergency ones, keeping model order."""
        report = context.report
        needs_hospitals = context.location is not None and any(c.is_emergency for c in candidates)

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            hospital_future = pool.submit(self._find_hospitals, context.location) if needs_hospitals else None
            precaution_futures = [
                pool.submit(self._recommend_precautions, c.name, report.symptoms) for c in candidates
            ]
            precautions = [f.result() for f in precaution_futures]
            hospitals = hospital_future.result() if hospital_future else None

        return [
            ConditionCandidate(
                name=candidate.name,
                description=candidate.description,
                is_emergency=candidate.is_emergency,
                precautions=precaution,
                nearby_hospitals=hospitals if candidate.is_emergency else None,
            )
            for candidate, precaution in zip(candidates, precautions)
        ]

    def _recommend_precautions(self, condition: str, symptoms: Optional[str]) -> Optional[Precautions]:
        try:
            return self.precautions.recommend(condition, symptoms, self.language)
        except Exception as e:
            logger.error("Error getting precautions for %s: %s", condition, e)
            return None

    def _find_hospitals(self, location: Geolocation) -> List[Hospital]:
        try:
            return self.hospital_search.find_nearby(location, self.language)
        except Exception as e:
            logger.error("Error finding nearby hospitals: %s", e)
            return []
