"""Translation tables for the supported interface languages.

Every locale is overlaid on top of English, so a key missing from a
translation still resolves to the English text.
"""
from typing import Dict, Union

from .models import Language


EN: Dict[str, str] = {
    "app_name": "Symptom Assistant",
    "initial_bot_message": (
        "Hi! I'm here to help you understand how you're feeling. "
        "Please describe your symptoms, or share a photo."
    ),
    "input_placeholder": "Describe your symptoms...",
    "answer_placeholder": "Type your answer...",
    "anything_else_prompt": "Is there anything else you'd like to add that might help?",
    "anything_else_placeholder": "Please tell me what else you've noticed.",
    "yes": "Yes",
    "no": "No",
    "thinking": "Thinking...",
    "analyzing_answers": "Analyzing your answers...",
    "error_title": "Something went wrong",
    "error_message": "Sorry, I couldn't process that right now. Please try again.",
    "try_again": "Please try again.",
    "missing_input": "Please provide a description or a photo of your symptoms.",
    "busy": "Please wait, I'm still working on your last message.",
    "visual_symptoms": "Symptoms in the photo",
    "photo_input": "Here is a photo of my symptoms:",
    "capture": "Capture",
    "no_suggestions_found": "No suggestions found",
    "no_suggestions_details": (
        "I couldn't identify any likely conditions from the information provided. "
        "Please consult a healthcare professional."
    ),
    "refined_possibilities": "Here are some possibilities based on what you've told me:",
    "disclaimer_title": "Disclaimer",
    "disclaimer_text": (
        "This is not medical advice or a diagnosis. "
        "Always consult a qualified healthcare professional."
    ),
    "emergency": "Emergency",
    "non_emergency": "Non-emergency",
    "nearby_hospitals": "Nearby Hospitals",
    "suggested_precautions": "Suggested Precautions",
    "precautions": "Precautions",
    "reasoning": "Reasoning",
    "emergency_numbers": "Emergency Numbers",
    "ambulance": "Ambulance",
    "national_emergency": "National Emergency",
    "police": "Police",
    "fire": "Fire",
    "location_permission": "Location",
    "location_permission_desc": "Share your location to see nearby hospitals in an emergency.",
    "new_conversation": "New Conversation",
    "language": "Language",
}

HI: Dict[str, str] = {
    "app_name": "लक्षण सहायक",
    "initial_bot_message": (
        "नमस्ते! मैं यह समझने में आपकी मदद करने के लिए यहाँ हूँ कि आप कैसा महसूस कर रहे हैं। "
        "कृपया अपने लक्षण बताएं, या एक फ़ोटो साझा करें।"
    ),
    "input_placeholder": "अपने लक्षण बताएं...",
    "answer_placeholder": "अपना उत्तर लिखें...",
    "anything_else_prompt": "क्या आप कुछ और जोड़ना चाहेंगे जिससे मदद मिल सके?",
    "anything_else_placeholder": "कृपया बताएं कि आपने और क्या महसूस किया है।",
    "yes": "हाँ",
    "no": "नहीं",
    "thinking": "सोच रहा हूँ...",
    "analyzing_answers": "आपके उत्तरों का विश्लेषण कर रहा हूँ...",
    "error_title": "कुछ गलत हो गया",
    "error_message": "क्षमा करें, मैं अभी इसे संसाधित नहीं कर सका। कृपया पुनः प्रयास करें।",
    "try_again": "कृपया पुनः प्रयास करें।",
    "missing_input": "कृपया अपने लक्षणों का विवरण या फ़ोटो दें।",
    "busy": "कृपया प्रतीक्षा करें, मैं अभी आपके पिछले संदेश पर काम कर रहा हूँ।",
    "visual_symptoms": "फ़ोटो में दिख रहे लक्षण",
    "photo_input": "यह मेरे लक्षणों की एक फ़ोटो है:",
    "capture": "फ़ोटो लें",
    "no_suggestions_found": "कोई सुझाव नहीं मिला",
    "no_suggestions_details": (
        "दी गई जानकारी से मैं किसी संभावित स्थिति की पहचान नहीं कर सका। "
        "कृपया किसी स्वास्थ्य विशेषज्ञ से परामर्श करें।"
    ),
    "refined_possibilities": "आपने जो बताया उसके आधार पर कुछ संभावनाएँ ये हैं:",
    "disclaimer_title": "अस्वीकरण",
    "disclaimer_text": (
        "यह चिकित्सा सलाह या निदान नहीं है। "
        "हमेशा किसी योग्य स्वास्थ्य विशेषज्ञ से परामर्श करें।"
    ),
    "emergency": "आपातकाल",
    "non_emergency": "गैर-आपातकालीन",
    "nearby_hospitals": "नज़दीकी अस्पताल",
    "suggested_precautions": "सुझाई गई सावधानियाँ",
    "precautions": "सावधानियाँ",
    "reasoning": "कारण",
    "emergency_numbers": "आपातकालीन नंबर",
    "ambulance": "एम्बुलेंस",
    "national_emergency": "राष्ट्रीय आपातकाल",
    "police": "पुलिस",
    "fire": "अग्निशमन",
    "location_permission": "स्थान",
    "location_permission_desc": "आपात स्थिति में नज़दीकी अस्पताल देखने के लिए अपना स्थान साझा करें।",
    "new_conversation": "नई बातचीत",
    "language": "भाषा",
}

OR: Dict[str, str] = {
    "app_name": "ଲକ୍ଷଣ ସହାୟକ",
    "initial_bot_message": (
        "ନମସ୍କାର! ଆପଣ କିପରି ଅନୁଭବ କରୁଛନ୍ତି ତାହା ବୁଝିବାରେ ସାହାଯ୍ୟ କରିବା ପାଇଁ ମୁଁ ଏଠାରେ ଅଛି। "
        "ଦୟାକରି ଆପଣଙ୍କ ଲକ୍ଷଣ ବର୍ଣ୍ଣନା କରନ୍ତୁ, କିମ୍ବା ଏକ ଫଟୋ ଦିଅନ୍ତୁ।"
    ),
    "input_placeholder": "ଆପଣଙ୍କ ଲକ୍ଷଣ ବର୍ଣ୍ଣନା କରନ୍ତୁ...",
    "answer_placeholder": "ଆପଣଙ୍କ ଉତ୍ତର ଲେଖନ୍ତୁ...",
    "anything_else_prompt": "ଆଉ କିଛି ଯୋଡ଼ିବାକୁ ଚାହିଁବେ କି ଯାହା ସାହାଯ୍ୟ କରିପାରେ?",
    "anything_else_placeholder": "ଦୟାକରି କୁହନ୍ତୁ ଆପଣ ଆଉ କ'ଣ ଲକ୍ଷ୍ୟ କରିଛନ୍ତି।",
    "yes": "ହଁ",
    "no": "ନା",
    "thinking": "ଭାବୁଛି...",
    "analyzing_answers": "ଆପଣଙ୍କ ଉତ୍ତର ବିଶ୍ଳେଷଣ କରୁଛି...",
    "error_title": "କିଛି ଭୁଲ ହୋଇଗଲା",
    "error_message": "କ୍ଷମା କରନ୍ତୁ, ମୁଁ ବର୍ତ୍ତମାନ ଏହାକୁ ପ୍ରକ୍ରିୟା କରିପାରିଲି ନାହିଁ। ଦୟାକରି ପୁଣି ଚେଷ୍ଟା କରନ୍ତୁ।",
    "try_again": "ଦୟାକରି ପୁଣି ଚେଷ୍ଟା କରନ୍ତୁ।",
    "missing_input": "ଦୟାକରି ଆପଣଙ୍କ ଲକ୍ଷଣର ବିବରଣୀ କିମ୍ବା ଫଟୋ ଦିଅନ୍ତୁ।",
    "busy": "ଦୟାକରି ଅପେକ୍ଷା କରନ୍ତୁ, ମୁଁ ଆପଣଙ୍କ ପୂର୍ବ ବାର୍ତ୍ତା ଉପରେ କାମ କରୁଛି।",
    "visual_symptoms": "ଫଟୋରେ ଥିବା ଲକ୍ଷଣ",
    "photo_input": "ଏହା ମୋ ଲକ୍ଷଣର ଏକ ଫଟୋ:",
    "capture": "ଫଟୋ ନିଅନ୍ତୁ",
    "no_suggestions_found": "କୌଣସି ପରାମର୍ଶ ମିଳିଲା ନାହିଁ",
    "no_suggestions_details": (
        "ଦିଆଯାଇଥିବା ସୂଚନାରୁ ମୁଁ କୌଣସି ସମ୍ଭାବ୍ୟ ଅବସ୍ଥା ଚିହ୍ନଟ କରିପାରିଲି ନାହିଁ। "
        "ଦୟାକରି ଜଣେ ସ୍ୱାସ୍ଥ୍ୟ ବିଶେଷଜ୍ଞଙ୍କ ପରାମର୍ଶ ନିଅନ୍ତୁ।"
    ),
    "refined_possibilities": "ଆପଣ ଯାହା କହିଲେ ତାହା ଆଧାରରେ କିଛି ସମ୍ଭାବନା:",
    "disclaimer_title": "ଅସ୍ୱୀକାର",
    "disclaimer_text": (
        "ଏହା ଚିକିତ୍ସା ପରାମର୍ଶ କିମ୍ବା ରୋଗ ନିର୍ଣ୍ଣୟ ନୁହେଁ। "
        "ସର୍ବଦା ଜଣେ ଯୋଗ୍ୟ ସ୍ୱାସ୍ଥ୍ୟ ବିଶେଷଜ୍ଞଙ୍କ ପରାମର୍ଶ ନିଅନ୍ତୁ।"
    ),
    "emergency": "ଜରୁରୀକାଳୀନ",
    "non_emergency": "ଜରୁରୀ ନୁହେଁ",
    "nearby_hospitals": "ନିକଟସ୍ଥ ଡାକ୍ତରଖାନା",
    "suggested_precautions": "ପରାମର୍ଶିତ ସାବଧାନତା",
    "precautions": "ସାବଧାନତା",
    "reasoning": "କାରଣ",
    "emergency_numbers": "ଜରୁରୀକାଳୀନ ନମ୍ବର",
    "ambulance": "ଆମ୍ବୁଲାନ୍ସ",
    "national_emergency": "ଜାତୀୟ ଜରୁରୀକାଳୀନ",
    "police": "ପୋଲିସ",
    "fire": "ଅଗ୍ନିଶମ",
    "location_permission": "ଅବସ୍ଥାନ",
    "location_permission_desc": "ଜରୁରୀ ସ୍ଥିତିରେ ନିକଟସ୍ଥ ଡାକ୍ତରଖାନା ଦେଖିବା ପାଇଁ ଆପଣଙ୍କ ଅବସ୍ଥାନ ଦିଅନ୍ତୁ।",
    "new_conversation": "ନୂଆ କଥାବାର୍ତ୍ତା",
    "language": "ଭାଷା",
}

LOCALES: Dict[Language, Dict[str, str]] = {
    Language.EN: EN,
    Language.HI: HI,
    Language.OR: OR,
}

DEFAULT_LANGUAGE = Language.EN


def resolve_language(code: Union[str, Language, None]) -> Language:
    """Map a language code to a supported Language, falling back to English."""
    if isinstance(code, Language):
        return code
    try:
        return Language((code or "").strip().lower())
    except ValueError:
        return DEFAULT_LANGUAGE


def get_translations(code: Union[str, Language, None]) -> Dict[str, str]:
    language = resolve_language(code)
    return {**EN, **LOCALES[language]}
