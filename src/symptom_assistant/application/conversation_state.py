"""Pure transition table for a diagnostic episode.

Functions here take the current state, the episode context and the user's
message, and return the next state, context and prompts to display plus the
action the orchestrator has to run. They never call the model.
"""
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from symptom_assistant.domain.models import ConversationState, Geolocation, SymptomReport
from symptom_assistant.domain.rules import build_follow_up_transcript, is_affirmative, is_negative


class Action(str, Enum):
    NONE = "none"
    START_EPISODE = "start_episode"
    REFINE = "refine"


class EpisodeContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    report: SymptomReport
    questions: Tuple[str, ...] = ()
    answers: Tuple[str, ...] = ()
    additional_info: Optional[str] = None
    location: Optional[Geolocation] = None

    @property
    def next_question(self) -> Optional[str]:
        if len(self.answers) < len(self.questions):
            return self.questions[len(self.answers)]
        return None

    def with_questions(self, questions: Sequence[str]) -> "EpisodeContext":
        return self.model_copy(update={"questions": tuple(questions), "answers": ()})

    def with_answer(self, answer: str) -> "EpisodeContext":
        if self.next_question is None:
            return self
        return self.model_copy(update={"answers": self.answers + (answer,)})

    def with_additional_info(self, info: str) -> "EpisodeContext":
        return self.model_copy(update={"additional_info": info})

    def transcript(self) -> str:
        return build_follow_up_transcript(self.questions, self.answers, self.additional_info)


class Transition(BaseModel):
    state: ConversationState
    context: Optional[EpisodeContext] = None
    prompts: List[str] = Field(default_factory=list)
    action: Action = Action.NONE


def current_prompts(
    state: ConversationState,
    context: Optional[EpisodeContext],
    translations: Dict[str, str],
) -> List[str]:
    """The prompt the user is currently expected to answer, if any."""
    if state == ConversationState.AWAITING_FOLLOW_UP and context is not None and context.next_question:
        return [context.next_question]
    if state == ConversationState.AWAITING_ANYTHING_ELSE:
        return [translations["anything_else_prompt"]]
    return []


def on_user_message(
    state: ConversationState,
    context: Optional[EpisodeContext],
    message: str,
    translations: Dict[str, str],
) -> Transition:
    if state == ConversationState.IDLE or context is None:
        return Transition(state=ConversationState.IDLE, action=Action.START_EPISODE)

    if not message or not message.strip():
        return Transition(state=state, context=context, prompts=current_prompts(state, context, translations))

    if state == ConversationState.AWAITING_FOLLOW_UP:
        context = context.with_answer(message)
        next_question = context.next_question
        if next_question is not None:
            return Transition(state=state, context=context, prompts=[next_question])
        return Transition(
            state=ConversationState.AWAITING_ANYTHING_ELSE,
            context=context,
            prompts=[translations["anything_else_prompt"]],
        )

    # awaiting_anything_else: "yes" is checked before "no"; anything else is the extra info itself
    if is_affirmative(message, translations):
        return Transition(state=state, context=context, prompts=[translations["anything_else_placeholder"]])
    if is_negative(message, translations):
        return Transition(state=state, context=context, action=Action.REFINE)
    return Transition(state=state, context=context.with_additional_info(message), action=Action.REFINE)


def on_questions_ready(context: EpisodeContext, questions: Sequence[str]) -> Transition:
    context = context.with_questions(questions)
    if context.next_question is None:
        return Transition(state=ConversationState.IDLE, context=context, action=Action.REFINE)
    return Transition(
        state=ConversationState.AWAITING_FOLLOW_UP,
        context=context,
        prompts=[context.next_question],
    )


def on_episode_complete() -> Transition:
    return Transition(state=ConversationState.IDLE)
