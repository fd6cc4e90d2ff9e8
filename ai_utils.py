# ai_utils.py

import json
import logging
import os

import google.generativeai as genai
from google.generativeai.types import HarmCategory, HarmBlockThreshold

DEFAULT_MODEL_NAME = 'gemini-1.5-flash-latest'

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
}


class AnalysisError(Exception):
    """Raised when an AI call fails or returns something unusable."""


def get_model_name() -> str:
    return os.getenv('GEMINI_MODEL_NAME', DEFAULT_MODEL_NAME)


def configure_gemini():
    api_key = os.getenv('GEMINI_API_KEY')
    if not api_key:
        raise AnalysisError("API key is not available.")
    genai.configure(api_key=api_key)


def strip_markdown_fences(text: str) -> str:
    """Removes ```json ... ``` wrappers the model sometimes adds around JSON."""
    cleaned = (text or '').strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def repair_json(broken_json_text: str):
    """Uses a targeted prompt to ask the AI to fix a broken JSON string."""
    logging.warning(f"Attempting to repair broken JSON: {broken_json_text}")
    prompt = f"""The following text is a broken JSON object, likely due to unescaped quotes or other syntax errors. Please fix it and return ONLY the corrected, valid JSON object. Do not add any explanation or other text.

BROKEN JSON:
```json
{broken_json_text}
```

CORRECTED JSON:
"""
    try:
        repair_model = genai.GenerativeModel(get_model_name())
        response = repair_model.generate_content(prompt)
        return strip_markdown_fences(response.text)
    except Exception as e:
        logging.error(f"Failed to repair JSON: {e}")
        return None


def generate_structured(prompt: str, response_schema: dict) -> dict:
    """
    Sends a prompt to Gemini asking for JSON matching response_schema and
    returns the parsed object. Unreadable JSON gets one repair attempt.
    """
    model = genai.GenerativeModel(get_model_name())
    generation_config = genai.types.GenerationConfig(
        response_mime_type="application/json",
        response_schema=response_schema,
    )
    try:
        response = model.generate_content(
            prompt,
            generation_config=generation_config,
            safety_settings=SAFETY_SETTINGS,
        )
    except Exception as e:
        logging.error(f"Gemini request failed: {e}")
        raise AnalysisError(f"AI request failed: {e}") from e

    feedback = getattr(response, 'prompt_feedback', None)
    if feedback is not None and getattr(feedback, 'block_reason', None):
        raise AnalysisError(f"Prompt blocked for safety reasons: {feedback.block_reason}")

    try:
        response_text = strip_markdown_fences(response.text)
    except ValueError as e:
        # .text raises when the candidate has no parts
        raise AnalysisError(f"AI returned no content: {e}") from e
    if not response_text:
        raise AnalysisError("AI returned an empty response.")

    try:
        return json.loads(response_text)
    except json.JSONDecodeError:
        logging.warning("Initial JSON parsing failed. Attempting to repair.")

    repaired_json_text = repair_json(response_text)
    if not repaired_json_text:
        raise AnalysisError("AI returned unreadable JSON format, and the repair utility also failed.")
    try:
        parsed = json.loads(repaired_json_text)
        logging.info("Successfully repaired and parsed JSON.")
        return parsed
    except json.JSONDecodeError as e:
        logging.error(f"Failed to parse even the REPAIRED JSON. Error: {e}")
        raise AnalysisError("AI returned unreadable JSON format, and repair failed.") from e
