# tests/fakes.py

from __future__ import annotations

import copy
from types import SimpleNamespace

from microin.models.task import Task


class FakeRecommender:
    """
    Deterministic recommender for unit tests.

    - Captures the skill lists it was asked about
    - Returns copies of a predefined task list
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks = list(tasks or [])
        self.calls: list[list[str]] = []

    def recommend(self, skills: list[str]) -> list[Task]:
        self.calls.append(list(skills))
        if not skills:
            return []
        return [copy.deepcopy(t) for t in self.tasks]


class FakeGenaiClient:
    """
    Stand-in for google.genai.Client: only `client.models.generate_content`.

    Set `text` for the model reply, or `error` to make the call raise.
    """

    def __init__(self, text: str | None = None, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[dict] = []
        self.models = SimpleNamespace(generate_content=self._generate_content)

    def _generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)
