from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Language(str, Enum):
    EN = "en"
    HI = "hi"
    OR = "or"


class ConversationState(str, Enum):
    IDLE = "idle"
    AWAITING_FOLLOW_UP = "awaiting_follow_up"
    AWAITING_ANYTHING_ELSE = "awaiting_anything_else"


LANGUAGE_NAMES = {
    Language.EN: "English",
    Language.HI: "Hindi",
    Language.OR: "Odia",
}


class Geolocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class SymptomReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    symptoms: Optional[str] = None
    photo_data_uri: Optional[str] = Field(
        None, description="data:<mimetype>;base64,<encoded_data>"
    )
    language: Language = Language.EN

    @field_validator("symptoms")
    @classmethod
    def validate_symptoms(cls, v: Optional[str]):
        if v is not None:
            v = v.strip()
            if len(v) == 0:
                return None
        return v

    @field_validator("photo_data_uri")
    @classmethod
    def validate_photo(cls, v: Optional[str]):
        if not v:
            return None
        if not v.startswith("data:") or ";base64," not in v:
            raise ValueError("Photo must be a base64 data URI")
        return v

    @property
    def has_input(self) -> bool:
        return bool(self.symptoms or self.photo_data_uri)


class Hospital(BaseModel):
    name: str
    address: str
    phone: Optional[str] = None


class Precautions(BaseModel):
    precautions: str
    reasoning: str


class ConditionCandidate(BaseModel):
    name: str
    description: str
    is_emergency: bool = False
    precautions: Optional[Precautions] = None
    nearby_hospitals: Optional[List[Hospital]] = None
