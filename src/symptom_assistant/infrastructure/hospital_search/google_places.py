import logging
from typing import List

import requests

from symptom_assistant.application.ports import HospitalSearchPort
from symptom_assistant.domain.models import Geolocation, Hospital, Language
from symptom_assistant.infrastructure.config import Settings


logger = logging.getLogger(__name__)

NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"


class GooglePlacesHospitalSearchAdapter(HospitalSearchPort):
    def __init__(self, settings: Settings | None = None, radius_m: int = 5000):
        self.settings = settings or Settings()
        self.api_key = self.settings.google_places_api_key
        self.radius_m = radius_m

    def find_nearby(self, location: Geolocation, language: Language, limit: int = 3) -> List[Hospital]:
        if not self.api_key:
            logger.warning("Google Places API key missing; hospital search disabled.")
            return []

        params = {
            "location": f"{location.latitude},{location.longitude}",
            "radius": self.radius_m,
            "type": "hospital",
            "language": language.value,
            "key": self.api_key,
        }
        try:
            resp = requests.get(NEARBY_SEARCH_URL, params=params, timeout=15)
            resp.raise_for_status()
            data = resp.json()
        except Exception as e:
            logger.exception("Places NearbySearch failed: %s", e)
            return []

        hospitals: List[Hospital] = []
        for r in data.get("results", [])[:limit]:
            name = r.get("name")
            if not name:
                continue
            address = r.get("vicinity") or ""
            phone = None

            place_id = r.get("place_id")
            if place_id:
                details = self._place_details(place_id, language)
                phone = details.get("formatted_phone_number") or details.get("international_phone_number")
                address = details.get("formatted_address") or address

            hospitals.append(Hospital(name=name, address=address, phone=phone))

        return hospitals

    def _place_details(self, place_id: str, language: Language) -> dict:
        dparams = {
            "place_id": place_id,
            "fields": "formatted_address,formatted_phone_number,international_phone_number",
            "language": language.value,
            "key": self.api_key,
        }
        try:
            dresp = requests.get(DETAILS_URL, params=dparams, timeout=10)
            dresp.raise_for_status()
            return dresp.json().get("result", {}) or {}
        except Exception as e:
            # Details are optional; keep the nearby-search data
            logger.warning("Places Details failed for %s: %s", place_id, e)
            return {}
