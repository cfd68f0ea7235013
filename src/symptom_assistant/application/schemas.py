from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from symptom_assistant.domain.models import ConditionCandidate, ConversationState, Hospital


MAX_FOLLOW_UP_QUESTIONS = 4


class GreetingResult(BaseModel):
    is_greeting: bool = False
    response: str = ""

    @model_validator(mode="after")
    def clear_response_when_not_greeting(self):
        if not self.is_greeting:
            self.response = ""
        return self


class SymptomAnalysisResult(BaseModel):
    acknowledgement: str = ""
    follow_up_questions: List[str] = Field(default_factory=list)

    @field_validator("follow_up_questions")
    @classmethod
    def trim_questions(cls, v: List[str]):
        questions = [q.strip() for q in v if q and q.strip()]
        return questions[:MAX_FOLLOW_UP_QUESTIONS]


class RefinedCondition(BaseModel):
    name: str
    description: str
    is_emergency: bool = False


class RefinementResult(BaseModel):
    conditions: List[RefinedCondition] = Field(default_factory=list)


class HospitalListResult(BaseModel):
    hospitals: List[Hospital] = Field(default_factory=list)


class AssistantReply(BaseModel):
    """What the orchestrator hands back to the presentation layer after one user turn."""
    messages: List[str] = Field(default_factory=list)
    conditions: Optional[List[ConditionCandidate]] = None
    state: ConversationState = ConversationState.IDLE
    is_error: bool = False
