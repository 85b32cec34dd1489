# microin/models/user.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class SkillNFT:
    """Completion record handed to a student when their task is approved.

    task_id / task_title are a snapshot of the task at approval time,
    not a live reference.
    """
    id: str
    task_id: str
    task_title: str
    image_url: str
    issue_date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "taskTitle": self.task_title,
            "imageUrl": self.image_url,
            "issueDate": self.issue_date.isoformat(),
        }


@dataclass
class User:
    wallet_address: str
    name: str
    is_company: bool = False
    skills: list[str] = field(default_factory=list)
    # most recent first
    portfolio: list[SkillNFT] = field(default_factory=list)

    def has_nft_for(self, task_id: str) -> bool:
        return any(nft.task_id == task_id for nft in self.portfolio)

    def to_dict(self) -> dict[str, Any]:
        return {
            "walletAddress": self.wallet_address,
            "isCompany": self.is_company,
            "name": self.name,
            "skills": list(self.skills),
            "portfolio": [nft.to_dict() for nft in self.portfolio],
        }
