class AssistantError(Exception):
    """Base class for errors raised by the symptom assistant."""


class MissingSymptomInputError(AssistantError, ValueError):
    """Neither a symptom description nor a photo was supplied."""


class ModelResponseError(AssistantError):
    """The model call failed or its response did not match the expected schema."""


class ConversationBusyError(AssistantError):
    """A message arrived while the previous turn was still being processed."""
