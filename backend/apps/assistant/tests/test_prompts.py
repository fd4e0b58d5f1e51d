from apps.assistant.prompts import (
    GENERATION_CONFIG,
    SAFETY_SETTINGS,
    build_payload,
    build_prompt,
    sanitize_symptoms,
)


def test_sanitize_escapes_markup_characters():
    assert sanitize_symptoms("<script>") == "&lt;script&gt;"
    assert sanitize_symptoms("it's \"bad\"") == "it&#39;s &quot;bad&quot;"
    assert sanitize_symptoms("fever & chills") == "fever & chills"


def test_prompt_wraps_sanitized_text():
    prompt = build_prompt("<b>headache</b>")
    assert "&lt;b&gt;headache&lt;/b&gt;" in prompt
    assert "<b>" not in prompt
    assert "home remedies" in prompt
    assert "professional medical advice" in prompt
    assert "evidence-based, generally safe" in prompt
    assert "Do not suggest medications" in prompt


def test_payload_shape():
    payload = build_payload("hello")
    assert payload["contents"] == [{"role": "user", "parts": [{"text": "hello"}]}]
    assert payload["generationConfig"] == GENERATION_CONFIG
    assert payload["generationConfig"]["temperature"] == 0.2
    assert payload["generationConfig"]["maxOutputTokens"] == 1024
    assert {s["category"] for s in payload["safetySettings"]} == {
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    }
    assert all(s["threshold"] == "BLOCK_MEDIUM_AND_ABOVE" for s in SAFETY_SETTINGS)
