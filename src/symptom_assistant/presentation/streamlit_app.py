import base64
import hashlib
import logging
from typing import Dict, List, Optional

import streamlit as st

from symptom_assistant.application.conversation import SymptomConversationManager
from symptom_assistant.application.errors import ConversationBusyError
from symptom_assistant.application.schemas import AssistantReply
from symptom_assistant.application.use_cases import (
    ConditionRefinementUseCase,
    GreetingClassifierUseCase,
    HospitalLookupUseCase,
    PrecautionUseCase,
    SymptomAnalysisUseCase,
)
from symptom_assistant.domain.locales import get_translations
from symptom_assistant.domain.models import LANGUAGE_NAMES, ConditionCandidate, ConversationState, Geolocation, Language
from symptom_assistant.domain.rules import EMERGENCY_NUMBERS
from symptom_assistant.infrastructure.config import Settings
from symptom_assistant.infrastructure.hospital_search.google_places import GooglePlacesHospitalSearchAdapter
from symptom_assistant.infrastructure.llm.mistral_client import MistralLLMAdapter


logger = logging.getLogger(__name__)


def build_manager(settings: Settings) -> SymptomConversationManager:
    llm = MistralLLMAdapter(settings=settings)
    if settings.google_places_api_key:
        hospital_search = GooglePlacesHospitalSearchAdapter(settings=settings)
    else:
        hospital_search = HospitalLookupUseCase(llm)
    return SymptomConversationManager(
        greeting=GreetingClassifierUseCase(llm),
        analysis=SymptomAnalysisUseCase(llm),
        refinement=ConditionRefinementUseCase(llm),
        precautions=PrecautionUseCase(llm),
        hospital_search=hospital_search,
        language=settings.default_language,
    )


def photo_to_data_uri(data: bytes, mime_type: Optional[str]) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'image/jpeg'};base64,{encoded}"


def parse_location(latitude: str, longitude: str) -> Optional[Geolocation]:
    if not latitude.strip() or not longitude.strip():
        return None
    try:
        return Geolocation(latitude=float(latitude), longitude=float(longitude))
    except ValueError:
        return None


def format_conditions_for_chat(conditions: List[ConditionCandidate], translations: Dict[str, str]) -> str:
    """Format refined conditions as one markdown chat message."""
    if not conditions:
        return f"### {translations['no_suggestions_found']}\n\n{translations['no_suggestions_details']}"

    lines = [
        f"*{translations['disclaimer_title']}: {translations['disclaimer_text']}*\n",
        f"### {translations['refined_possibilities']}\n",
    ]
    for condition in conditions:
        badge = f"🚨 {translations['emergency']}" if condition.is_emergency else f"🟢 {translations['non_emergency']}"
        lines.append(f"#### {condition.name} ({badge})")
        lines.append(condition.description)

        if condition.is_emergency and condition.nearby_hospitals:
            lines.append(f"\n**🏥 {translations['nearby_hospitals']}**")
            for hospital in condition.nearby_hospitals:
                lines.append(f"- **{hospital.name}**, {hospital.address}")
                if hospital.phone:
                    lines.append(f"  - 📞 [{hospital.phone}](tel:{hospital.phone.replace(' ', '')})")

        if condition.precautions:
            lines.append(f"\n**🛡️ {translations['suggested_precautions']}**")
            lines.append(f"- *{translations['precautions']}:* {condition.precautions.precautions}")
            lines.append(f"- *{translations['reasoning']}:* {condition.precautions.reasoning}")
        lines.append("")

    return "\n".join(lines)


def _init_session_state(settings: Settings):
    if "conversation" not in st.session_state:
        st.session_state.conversation = build_manager(settings)
    if "chat_messages" not in st.session_state:
        st.session_state.chat_messages = []
    if "last_photo_digest" not in st.session_state:
        st.session_state.last_photo_digest = None


def _require_mistral_key(settings: Settings) -> bool:
    if not settings.mistral_api_key:
        st.error(
            "❌ **Mistral API Key Missing**\n\n"
            "Add `MISTRAL_API_KEY` to `.streamlit/secrets.toml` or as an environment variable."
        )
        return False
    return True


def _render_sidebar(settings: Settings, conversation: SymptomConversationManager):
    translations = conversation.translations
    st.sidebar.title("⚙️ Settings")

    languages = list(Language)
    selected = st.sidebar.selectbox(
        translations["language"],
        languages,
        index=languages.index(conversation.language),
        format_func=lambda lang: LANGUAGE_NAMES[lang],
    )
    if selected != conversation.language:
        conversation.set_language(selected)
        st.rerun()

    st.sidebar.markdown(f"### 📍 {translations['location_permission']}")
    if conversation.location:
        st.sidebar.success(f"✓ {conversation.location.latitude:.4f}, {conversation.location.longitude:.4f}")
    else:
        st.sidebar.caption(translations["location_permission_desc"])
        latitude = st.sidebar.text_input("Latitude", placeholder="e.g., 20.2961")
        longitude = st.sidebar.text_input("Longitude", placeholder="e.g., 85.8245")
        conversation.capture_location(parse_location(latitude, longitude))

    st.sidebar.markdown(f"### 📞 {translations['emergency_numbers']}")
    for key, number in EMERGENCY_NUMBERS.items():
        st.sidebar.markdown(f"- {translations[key]}: [{number}](tel:{number})")

    st.sidebar.divider()
    st.sidebar.caption(f"**Model:** {settings.mistral_model}")

    if st.sidebar.button(f"🔄 {translations['new_conversation']}", use_container_width=True):
        conversation.start_new()
        st.session_state.chat_messages = []
        st.rerun()


def _append_reply(reply: AssistantReply, translations: Dict[str, str]):
    for message in reply.messages:
        st.session_state.chat_messages.append({"role": "assistant", "content": message})
    if reply.conditions is not None:
        st.session_state.chat_messages.append({
            "role": "assistant",
            "content": format_conditions_for_chat(reply.conditions, translations),
        })


def spinner_text(state: ConversationState, translations: Dict[str, str]) -> str:
    if state == ConversationState.IDLE:
        return translations["thinking"]
    return translations["analyzing_answers"]


def _submit(conversation: SymptomConversationManager, text: Optional[str], photo_data_uri: Optional[str] = None):
    with st.spinner(f"⏳ {spinner_text(conversation.state, conversation.translations)}"):
        try:
            reply = conversation.handle_message(text, photo_data_uri)
        except ConversationBusyError as e:
            st.warning(str(e))
            return
    translations = conversation.translations
    if reply.is_error:
        st.toast(f"**{translations['error_title']}**\n\n{translations['try_again']}", icon="⚠️")
    _append_reply(reply, translations)


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title="Symptom Assistant",
        page_icon="⚕️",
        layout="centered",
        initial_sidebar_state="expanded",
    )

    if not _require_mistral_key(settings):
        st.stop()

    _init_session_state(settings)
    conversation: SymptomConversationManager = st.session_state.conversation
    translations = get_translations(conversation.language)
    _render_sidebar(settings, conversation)

    st.markdown(f"# 🩺 {translations['app_name']}")
    st.info(f"⚕️ **{translations['disclaimer_title']}:** {translations['disclaimer_text']}")

    if not st.session_state.chat_messages:
        st.session_state.chat_messages.append({"role": "assistant", "content": translations["initial_bot_message"]})

    for msg in st.session_state.chat_messages:
        with st.chat_message(msg["role"]):
            if msg.get("image"):
                st.image(msg["image"], width=200)
            st.markdown(msg["content"])

    with st.expander(f"📷 {translations['capture']}"):
        photo = st.camera_input(translations["photo_input"]) or st.file_uploader(
            translations["photo_input"], type=["png", "jpg", "jpeg", "webp"]
        )
        if photo is not None:
            data = photo.getvalue()
            digest = hashlib.sha1(data).hexdigest()
            if digest != st.session_state.last_photo_digest:
                st.session_state.last_photo_digest = digest
                data_uri = photo_to_data_uri(data, photo.type)
                st.session_state.chat_messages.append({
                    "role": "user",
                    "content": translations["photo_input"],
                    "image": data,
                })
                _submit(conversation, None, data_uri)
                st.rerun()

    placeholder = translations["input_placeholder"]
    if conversation.state != ConversationState.IDLE:
        placeholder = translations["answer_placeholder"]
    user_input = st.chat_input(placeholder, disabled=conversation.busy)

    if user_input:
        st.session_state.chat_messages.append({"role": "user", "content": user_input})
        _submit(conversation, user_input)
        st.rerun()


if __name__ == "__main__":
    main()
