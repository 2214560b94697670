"""Topic and discipline suggestions from Gemini.

Every failure (missing key, network error, malformed or mis-shaped JSON)
degrades to an empty list. Callers never see an exception.
"""
import json
import logging
from typing import Optional

from google import genai
from google.genai import types
from pydantic import TypeAdapter, ValidationError

from concurseiro import config
from concurseiro.models.suggestions import DisciplineSuggestion

logger = logging.getLogger(__name__)

TOPICS_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(type=types.Type.STRING),
)

DISCIPLINES_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "name": types.Schema(type=types.Type.STRING),
            "color": types.Schema(type=types.Type.STRING, description="Hex color code"),
        },
        required=["name", "color"],
    ),
)

_topics_adapter = TypeAdapter(list[str])
_disciplines_adapter = TypeAdapter(list[DisciplineSuggestion])


def _generate_json(prompt: str, schema: types.Schema) -> Optional[str]:
    """Run a structured-output request and return the raw response text."""
    api_key = config.api_key()
    if not api_key:
        logger.warning("GOOGLE_API_KEY not set; skipping AI suggestion")
        return None

    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=config.model_name(),
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return response.text
    except Exception as e:
        logger.error("AI request failed: %s", e)
        return None


def generate_topics_for_discipline(discipline_name: str, plan_name: str) -> list[str]:
    """Suggest essential topic names for a discipline of a plan."""
    prompt = (
        f'Gere uma lista de tópicos essenciais para estudar a disciplina "{discipline_name}" '
        f'para o concurso/plano "{plan_name}". Responda apenas com a lista de nomes dos tópicos.'
    )
    text = _generate_json(prompt, TOPICS_SCHEMA)
    if not text:
        return []

    try:
        topics = _topics_adapter.validate_python(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Failed to parse AI response: %s", e)
        return []
    return [t.strip() for t in topics if t.strip()]


def suggest_disciplines(plan_name: str, cargos: Optional[str] = None) -> list[DisciplineSuggestion]:
    """Suggest the main disciplines for a plan, optionally for a given role."""
    prompt = f'Sugira 8 disciplinas principais para um plano de estudos focado em: "{plan_name}"'
    if cargos:
        prompt += f" para o cargo de {cargos}"
    prompt += "."

    text = _generate_json(prompt, DISCIPLINES_SCHEMA)
    if not text:
        return []

    try:
        return _disciplines_adapter.validate_python(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Failed to parse AI response: %s", e)
        return []
