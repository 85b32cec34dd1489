# microin/services/recommendation_service.py
from __future__ import annotations

import json
import logging
import math
import uuid
from typing import Any, Iterable, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from ..exceptions import ExternalServiceFailure
from ..models.task import Task, TaskStatus

log = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_LIMIT = 3

_PROMPT = (
    "Based on the following student skills: [{skills}], generate a list of {limit} suitable "
    "micro-internship tasks for a platform called MICROIN. The tasks should be short, "
    "skill-focused, and appropriate for a student. For each task, provide a title, a fictional "
    "company name, a brief description, the required skills, a reward amount between 50 and 200, "
    "and the reward token (use 'USDC'). The status should be 'Open'."
)

_RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "STRING", "description": "A unique ID for the task, perhaps a UUID."},
            "title": {"type": "STRING"},
            "company": {"type": "STRING"},
            "description": {"type": "STRING"},
            "skills": {"type": "ARRAY", "items": {"type": "STRING"}},
            "reward": {"type": "NUMBER"},
            "rewardToken": {"type": "STRING"},
            "status": {"type": "STRING", "description": "Should always be 'Open'"},
        },
        "required": ["id", "title", "company", "description", "skills", "reward", "rewardToken", "status"],
    },
}


def build_prompt(skills: Iterable[str], limit: int = DEFAULT_LIMIT) -> str:
    return _PROMPT.format(skills=", ".join(skills), limit=limit)


def strip_code_fence(text: str) -> str:
    """Models sometimes wrap JSON in ```json ... ``` despite the mime type."""
    s = (text or "").strip()
    if not s.startswith("```"):
        return s
    s = s[3:]
    if s.lower().startswith("json"):
        s = s[4:]
    if s.rstrip().endswith("```"):
        s = s.rstrip()[:-3]
    return s.strip()


def _fallback_id() -> str:
    return f"ai-{uuid.uuid4().hex[:9]}"


def _task_from_payload(item: Any) -> Optional[Task]:
    if not isinstance(item, dict):
        return None
    title = item.get("title")
    if not isinstance(title, str) or not title.strip():
        return None
    raw_reward = item.get("reward", 0)
    if isinstance(raw_reward, bool):
        return None
    try:
        reward = float(raw_reward)
    except (TypeError, ValueError):
        return None
    # NaN / Infinity would be serialized as invalid JSON
    if not math.isfinite(reward):
        return None

    skills = item.get("skills") or []
    if isinstance(skills, str):
        skills = [s.strip() for s in skills.split(",")]
    if not isinstance(skills, list):
        return None
    skills = [s for s in skills if isinstance(s, str) and s]

    return Task(
        id=str(item.get("id") or _fallback_id()),
        title=title.strip(),
        company=str(item.get("company") or ""),
        description=str(item.get("description") or ""),
        skills=skills,
        reward=reward,
        reward_token=str(item.get("rewardToken") or "USDC"),
        status=TaskStatus.OPEN,
    )


def parse_recommendations(text: str, limit: int = DEFAULT_LIMIT) -> list[Task]:
    """Turn the model's JSON text into Task candidates.

    Raises ExternalServiceFailure if the text is empty or not JSON; malformed
    items inside a valid array are skipped.
    """
    body = strip_code_fence(text)
    if not body:
        raise ExternalServiceFailure("empty recommendation payload")
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ExternalServiceFailure(f"recommendation payload is not JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("tasks", [])
    if not isinstance(data, list):
        raise ExternalServiceFailure("recommendation payload is not a list")

    out: list[Task] = []
    for item in data:
        task = _task_from_payload(item)
        if task is None:
            log.debug("Skipping malformed recommendation item: %r", item)
            continue
        out.append(task)
        if len(out) >= limit:
            break
    return out


def merge_recommendations(recommended: Iterable[Task], existing: Iterable[Task]) -> list[Task]:
    """Drop recommended tasks whose id is already on the board (by id, not content)."""
    known = {t.id for t in existing}
    return [t for t in recommended if t.id not in known]


class GeminiRecommender:
    """Asks Gemini (through the google-genai SDK) for tasks that fit a skill list.

    recommend() never raises: every failure is logged and comes back as [].
    """

    def __init__(self, *, api_key: str, model: str = DEFAULT_MODEL,
                 api_base: str | None = None, timeout: float = 20.0,
                 limit: int = DEFAULT_LIMIT, client: genai.Client | None = None):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base or None
        self.timeout = timeout
        self.limit = limit
        self._client = client

    @classmethod
    def from_config(cls, config) -> "GeminiRecommender":
        return cls(
            api_key=config["GEMINI_API_KEY"],
            model=config.get("GEMINI_MODEL") or DEFAULT_MODEL,
            api_base=config.get("GEMINI_API_BASE") or None,
            timeout=float(config.get("RECOMMENDER_TIMEOUT_SECONDS", 20.0)),
            limit=int(config.get("RECOMMENDATION_LIMIT", DEFAULT_LIMIT)),
        )

    def _get_client(self) -> genai.Client:
        """Lazily create and cache the SDK client (no network at app start)."""
        if self._client is not None:
            return self._client
        http_options = genai_types.HttpOptions(
            base_url=self.api_base,
            timeout=int(self.timeout * 1000),  # milliseconds
        )
        self._client = genai.Client(api_key=self.api_key, http_options=http_options)
        return self._client

    def _generate(self, prompt: str) -> str:
        try:
            response = self._get_client().models.generate_content(
                model=self.model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=_RESPONSE_SCHEMA,
                ),
            )
        except genai_errors.APIError as e:
            log.error("Gemini error %s | %s", e.code, e.message)
            raise ExternalServiceFailure(f"generate_content failed: {e}") from e
        except httpx.HTTPError as e:
            raise ExternalServiceFailure(f"generate_content transport error: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            raise ExternalServiceFailure("response did not contain text")
        return text

    def recommend(self, skills: list[str]) -> list[Task]:
        if not skills:
            return []
        try:
            text = self._generate(build_prompt(skills, self.limit))
            tasks = parse_recommendations(text, self.limit)
        except ExternalServiceFailure as e:
            log.error("Error fetching task recommendations: %s", e)
            return []
        except Exception as e:
            log.exception("recommend failed unexpectedly: %s", e)
            return []
        log.info("Recommendations skills=%s returned=%s", len(skills), len(tasks))
        return tasks
