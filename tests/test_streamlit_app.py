"""Tests for the chat formatting helpers of the Streamlit page."""
import base64

from symptom_assistant.domain.locales import get_translations
from symptom_assistant.domain.models import (
    ConditionCandidate,
    ConversationState,
    Geolocation,
    Hospital,
    Language,
    Precautions,
)
from symptom_assistant.presentation.streamlit_app import (
    format_conditions_for_chat,
    parse_location,
    photo_to_data_uri,
    spinner_text,
)


EN = get_translations(Language.EN)


def test_no_conditions_shows_notice():
    text = format_conditions_for_chat([], EN)
    assert EN["no_suggestions_found"] in text
    assert EN["no_suggestions_details"] in text


def test_conditions_render_in_order_with_enrichment():
    conditions = [
        ConditionCandidate(
            name="Heart attack",
            description="Blocked blood flow to the heart.",
            is_emergency=True,
            nearby_hospitals=[Hospital(name="City Hospital", address="1 Main Rd", phone="+91 674 000 0000")],
        ),
        ConditionCandidate(
            name="Acid reflux",
            description="Stomach acid irritating the food pipe.",
            precautions=Precautions(precautions="Avoid lying down after meals.", reasoning="It reduces reflux."),
        ),
    ]

    text = format_conditions_for_chat(conditions, EN)

    assert text.index("Heart attack") < text.index("Acid reflux")
    assert EN["disclaimer_text"] in text
    assert "City Hospital" in text
    assert "tel:+916740000000" in text
    assert "Avoid lying down after meals." in text
    assert text.count(EN["suggested_precautions"]) == 1


def test_parse_location():
    assert parse_location("20.29", "85.82") == Geolocation(latitude=20.29, longitude=85.82)
    assert parse_location("", "85.82") is None
    assert parse_location("north", "east") is None
    assert parse_location("95", "0") is None


def test_photo_to_data_uri():
    uri = photo_to_data_uri(b"\x89PNG", "image/png")
    assert uri == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode("ascii")
    assert photo_to_data_uri(b"x", None).startswith("data:image/jpeg;base64,")


def test_spinner_text_depends_on_state():
    hi = get_translations(Language.HI)
    assert spinner_text(ConversationState.IDLE, hi) == hi["thinking"]
    assert spinner_text(ConversationState.AWAITING_FOLLOW_UP, hi) == hi["analyzing_answers"]
    assert spinner_text(ConversationState.AWAITING_ANYTHING_ELSE, EN) == EN["analyzing_answers"]
