"""Tests for configuration, the Mistral adapter and Google Places hospital search."""
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from conftest import PHOTO
from symptom_assistant.domain.models import Geolocation, Hospital, Language
from symptom_assistant.infrastructure import config
from symptom_assistant.infrastructure.hospital_search.google_places import GooglePlacesHospitalSearchAdapter
from symptom_assistant.infrastructure.llm.mistral_client import MistralLLMAdapter, _has_image


LOCATION = Geolocation(latitude=20.2961, longitude=85.8245)


class StubSettings:
    def __init__(self, **values):
        self.mistral_api_key = values.get("mistral_api_key")
        self.mistral_model = values.get("mistral_model", "mistral-large-latest")
        self.mistral_vision_model = values.get("mistral_vision_model", "pixtral-large-latest")
        self.google_places_api_key = values.get("google_places_api_key")


@pytest.fixture
def no_streamlit_secrets(monkeypatch):
    monkeypatch.setattr(config, "_HAS_STREAMLIT", False)


class TestSettings:
    def test_defaults(self, monkeypatch, no_streamlit_secrets):
        for name in ("MISTRAL_MODEL", "MISTRAL_VISION_MODEL", "DEFAULT_LANGUAGE", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = config.Settings()
        assert settings.mistral_model == "mistral-large-latest"
        assert settings.mistral_vision_model == "pixtral-large-latest"
        assert settings.default_language == Language.EN
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch, no_streamlit_secrets):
        monkeypatch.setenv("MISTRAL_API_KEY", "secret")
        monkeypatch.setenv("DEFAULT_LANGUAGE", "hi")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = config.Settings()
        assert settings.mistral_api_key == "secret"
        assert settings.default_language == Language.HI
        assert settings.log_level == "DEBUG"

    def test_unknown_language_falls_back(self, monkeypatch, no_streamlit_secrets):
        monkeypatch.setenv("DEFAULT_LANGUAGE", "fr")
        assert config.Settings().default_language == Language.EN

    def test_blank_values_count_as_unset(self, monkeypatch, no_streamlit_secrets):
        monkeypatch.setenv("MISTRAL_MODEL", "   ")
        monkeypatch.setenv("MISTRAL_API_KEY", "")
        settings = config.Settings()
        assert settings.mistral_model == "mistral-large-latest"
        assert settings.mistral_api_key is None

    def test_unknown_log_level_falls_back(self, monkeypatch, no_streamlit_secrets):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        assert config.Settings().log_level == "INFO"

    def test_streamlit_secret_wins_over_environment(self, monkeypatch):
        monkeypatch.setattr(config, "_HAS_STREAMLIT", True)
        monkeypatch.setattr(config, "st", Mock(secrets={"MISTRAL_MODEL": "from-secrets"}), raising=False)
        monkeypatch.setenv("MISTRAL_MODEL", "from-env")
        assert config.Settings().mistral_model == "from-secrets"


class TestMistralAdapter:
    def test_has_image(self):
        text_only = [{"role": "user", "content": "hello"}]
        with_image = [{"role": "user", "content": [
            {"type": "text", "text": "look"},
            {"type": "image_url", "image_url": PHOTO},
        ]}]
        assert not _has_image(text_only)
        assert _has_image(with_image)

    def test_missing_key_raises_on_call(self):
        adapter = MistralLLMAdapter(settings=StubSettings())
        with pytest.raises(RuntimeError):
            adapter.generate_json([{"role": "user", "content": "hi"}])

    def test_selects_vision_model_for_images(self):
        adapter = MistralLLMAdapter(settings=StubSettings(mistral_model="text-model", mistral_vision_model="vision-model"))
        client = MagicMock()
        client.chat.complete.return_value.choices = [Mock(message=Mock(content='{"ok": true}'))]
        adapter._client = client

        assert adapter.generate_json([{"role": "user", "content": "hi"}]) == '{"ok": true}'
        assert client.chat.complete.call_args.kwargs["model"] == "text-model"
        assert client.chat.complete.call_args.kwargs["response_format"] == {"type": "json_object"}

        adapter.generate_json([{"role": "user", "content": [{"type": "image_url", "image_url": PHOTO}]}])
        assert client.chat.complete.call_args.kwargs["model"] == "vision-model"

    def test_client_errors_propagate(self):
        adapter = MistralLLMAdapter(settings=StubSettings())
        adapter._client = MagicMock()
        adapter._client.chat.complete.side_effect = ConnectionError("down")
        with pytest.raises(ConnectionError):
            adapter.generate_json([{"role": "user", "content": "hi"}])


def _response(payload):
    resp = Mock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


class TestGooglePlacesHospitalSearch:
    NEARBY = {"results": [
        {"name": "AIIMS Bhubaneswar", "vicinity": "Sijua", "place_id": "p1"},
        {"name": "Capital Hospital", "vicinity": "Unit 6", "place_id": "p2"},
        {"name": "Kalinga Hospital", "vicinity": "Chandrasekharpur"},
        {"name": "SUM Hospital", "vicinity": "K8"},
    ]}

    def _fake_get(self, url, params=None, timeout=None):
        if "nearbysearch" in url:
            return _response(self.NEARBY)
        if params["place_id"] == "p1":
            return _response({"result": {
                "formatted_address": "Sijua, Patrapada, Bhubaneswar, Odisha 751019",
                "formatted_phone_number": "0674 247 6789",
            }})
        raise requests.ConnectionError("details unavailable")

    def test_missing_key_returns_empty(self):
        adapter = GooglePlacesHospitalSearchAdapter(settings=StubSettings())
        assert adapter.find_nearby(LOCATION, Language.EN) == []

    def test_nearby_hospitals_with_details(self):
        adapter = GooglePlacesHospitalSearchAdapter(settings=StubSettings(google_places_api_key="k"))
        with patch(
            "symptom_assistant.infrastructure.hospital_search.google_places.requests.get",
            side_effect=self._fake_get,
        ) as mock_get:
            hospitals = adapter.find_nearby(LOCATION, Language.OR)

        assert hospitals == [
            Hospital(name="AIIMS Bhubaneswar", address="Sijua, Patrapada, Bhubaneswar, Odisha 751019", phone="0674 247 6789"),
            Hospital(name="Capital Hospital", address="Unit 6", phone=None),
            Hospital(name="Kalinga Hospital", address="Chandrasekharpur", phone=None),
        ]
        nearby_params = mock_get.call_args_list[0].kwargs["params"]
        assert nearby_params["location"] == "20.2961,85.8245"
        assert nearby_params["type"] == "hospital"
        assert nearby_params["language"] == "or"

    def test_search_failure_returns_empty(self):
        adapter = GooglePlacesHospitalSearchAdapter(settings=StubSettings(google_places_api_key="k"))
        with patch(
            "symptom_assistant.infrastructure.hospital_search.google_places.requests.get",
            side_effect=requests.Timeout("slow"),
        ):
            assert adapter.find_nearby(LOCATION, Language.EN) == []
