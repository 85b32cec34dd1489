# microin/models/task.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class TaskStatus(str, Enum):
    # wire values match the original web client
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


@dataclass
class Task:
    id: str
    title: str
    company: str
    description: str
    skills: list[str] = field(default_factory=list)
    reward: float = 0.0
    reward_token: str = "USDC"
    status: TaskStatus = TaskStatus.OPEN
    assignee: Optional[str] = None  # wallet address of the student

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "description": self.description,
            "skills": list(self.skills),
            "reward": self.reward,
            "rewardToken": self.reward_token,
            "status": self.status.value,
        }
        if self.assignee:
            data["assignee"] = self.assignee
        return data
