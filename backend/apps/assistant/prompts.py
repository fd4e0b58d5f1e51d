from typing import Any, Dict, List

_ESCAPES = str.maketrans({
    "<": "&lt;",
    ">": "&gt;",
    "'": "&#39;",
    '"': "&quot;",
})

PROMPT_TEMPLATE = (
    "You are a knowledgeable health assistant. Suggest safe home remedies only "
    "for these symptoms: {symptoms}.\n"
    "Format your response in a clear, easy-to-read way. "
    "Always include a disclaimer that the reader should seek professional medical advice. "
    "Focus only on evidence-based, generally safe remedies. "
    "Do not suggest medications or any dangerous treatments."
)

GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.2,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}

SAFETY_SETTINGS: List[Dict[str, str]] = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


def sanitize_symptoms(text: str) -> str:
    """Escape markup characters to HTML entities. Ampersands are left as-is."""
    return text.translate(_ESCAPES)


def build_prompt(symptom_text: str) -> str:
    return PROMPT_TEMPLATE.format(symptoms=sanitize_symptoms(symptom_text))


def build_payload(prompt: str) -> Dict[str, Any]:
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": dict(GENERATION_CONFIG),
        "safetySettings": [dict(s) for s in SAFETY_SETTINGS],
    }
