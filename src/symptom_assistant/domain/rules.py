from typing import Dict, Optional, Sequence


EMERGENCY_NUMBERS = {
    "ambulance": "102",
    "national_emergency": "112",
    "police": "100",
    "fire": "101",
}

NO_FOLLOW_UP_ANSWERS = "No follow-up answers."


def matches_token(message: str, token: Optional[str]) -> bool:
    """Case-insensitive substring test of a localized token against a user message."""
    if not token:
        return False
    return token.strip().lower() in message.lower()


def is_affirmative(message: str, translations: Dict[str, str]) -> bool:
    return matches_token(message, translations.get("yes"))


def is_negative(message: str, translations: Dict[str, str]) -> bool:
    return matches_token(message, translations.get("no"))


def build_follow_up_transcript(
    questions: Sequence[str],
    answers: Sequence[str],
    additional_info: Optional[str] = None,
) -> str:
    blocks = []
    for i, question in enumerate(questions):
        answer = answers[i] if i < len(answers) else ""
        blocks.append(f"{question}\nAnswer: {answer}")
    transcript = "\n\n".join(blocks) or NO_FOLLOW_UP_ANSWERS

    if additional_info:
        transcript = f"{transcript}\n\nAdditional Information: {additional_info}"
    return transcript
