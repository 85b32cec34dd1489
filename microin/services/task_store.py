# microin/services/task_store.py
from __future__ import annotations

import copy
import logging
import threading
import uuid
from collections import OrderedDict
from datetime import date
from typing import Callable, Iterable, Optional

from ..exceptions import NotFoundError
from ..models.task import Task, TaskStatus
from ..models.user import SkillNFT, User

log = logging.getLogger(__name__)

DEFAULT_NFT_IMAGE_URL = "https://picsum.photos/seed/{task_id}/500/500"


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


class TaskStore:
    """
    In-memory owner of every task and user record.

    All reads and writes go through one re-entrant lock, so create/apply/approve
    are atomic even when the WSGI server runs requests on several threads.
    Every entity handed back to a caller is a copy.
    """

    def __init__(
        self,
        *,
        nft_image_url: str = DEFAULT_NFT_IMAGE_URL,
        today: Callable[[], date] = date.today,
    ) -> None:
        # insertion order == display order (newest task first)
        self._tasks: OrderedDict[str, Task] = OrderedDict()
        self._users: dict[str, User] = {}
        self._lock = threading.RLock()
        self._nft_image_url = nft_image_url
        self._today = today

    # ---- seeding ----

    def load(self, *, tasks: Iterable[Task] = (), users: Iterable[User] = ()) -> None:
        """Bulk-load records, keeping the given task order."""
        with self._lock:
            for t in tasks:
                self._tasks[t.id] = copy.deepcopy(t)
            for u in users:
                self._users[u.wallet_address] = copy.deepcopy(u)
        log.info("TaskStore loaded tasks=%s users=%s", len(self._tasks), len(self._users))

    def add_user(self, user: User) -> User:
        with self._lock:
            self._users[user.wallet_address] = copy.deepcopy(user)
            return copy.deepcopy(self._users[user.wallet_address])

    # ---- reads ----

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return [copy.deepcopy(t) for t in self._tasks.values()]

    def list_users(self) -> list[User]:
        with self._lock:
            return [copy.deepcopy(u) for u in self._users.values()]

    def get_task(self, task_id: str) -> Task:
        with self._lock:
            return copy.deepcopy(self._require_task(task_id))

    def get_user(self, wallet_address: str) -> User:
        with self._lock:
            user = self._users.get(wallet_address)
            if user is None:
                raise NotFoundError("User not found")
            return copy.deepcopy(user)

    # ---- lifecycle ----

    def create_task(
        self,
        *,
        title: str,
        description: str,
        skills: list[str],
        reward: float,
        reward_token: str,
        company: str,
    ) -> Task:
        task = Task(
            id=_new_id("task"),
            title=title,
            company=company,
            description=description,
            skills=list(skills),
            reward=reward,
            reward_token=reward_token,
            status=TaskStatus.OPEN,
            assignee=None,
        )
        with self._lock:
            # newest first
            self._tasks[task.id] = task
            self._tasks.move_to_end(task.id, last=False)
        log.info("Task created id=%s company=%s", task.id, company)
        return copy.deepcopy(task)

    def apply_to_task(self, task_id: str, applicant_wallet: str) -> Task:
        """Assign the task to the applicant.

        There is no guard on the prior status: applying to an In Progress or
        Completed task overwrites the assignee and moves it back to In Progress.
        """
        with self._lock:
            task = self._require_task(task_id)
            if task.status is not TaskStatus.OPEN:
                log.warning("Re-apply on task id=%s status=%s (assignee %s -> %s)",
                            task_id, task.status.value, task.assignee, applicant_wallet)
            task.status = TaskStatus.IN_PROGRESS
            task.assignee = applicant_wallet
            return copy.deepcopy(task)

    def approve_task(self, task_id: str) -> tuple[Task, Optional[User]]:
        """Complete the task and issue a SkillNFT to the assignee.

        Returns (task, updated_user). updated_user is None when the assignee
        wallet has no user record; the task is still marked Completed in that case.
        Company wallets get the task completed but never a portfolio entry.
        """
        with self._lock:
            task = self._require_task(task_id)
            if not task.assignee:
                raise NotFoundError("Task not found or task has no assignee")

            task.status = TaskStatus.COMPLETED

            user = self._users.get(task.assignee)
            if user is None:
                log.warning("Approved task id=%s but assignee %s has no user record",
                            task_id, task.assignee)
                return copy.deepcopy(task), None

            if user.is_company:
                log.warning("Approved task id=%s for company wallet %s; no SkillNFT issued",
                            task_id, user.wallet_address)
            elif user.has_nft_for(task.id):
                log.info("User %s already holds a SkillNFT for task id=%s", user.wallet_address, task.id)
            else:
                nft = SkillNFT(
                    id=_new_id("nft"),
                    task_id=task.id,
                    task_title=task.title,
                    image_url=self._nft_image_url.format(task_id=task.id),
                    issue_date=self._today(),
                )
                user.portfolio.insert(0, nft)
                log.info("SkillNFT issued id=%s task=%s to=%s", nft.id, task.id, user.wallet_address)

            return copy.deepcopy(task), copy.deepcopy(user)

    # ---- helpers ----

    def _require_task(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {"tasks": len(self._tasks), "users": len(self._users)}
