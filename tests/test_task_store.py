# tests/test_task_store.py

from __future__ import annotations

import threading

import pytest

from microin.exceptions import NotFoundError
from microin.models.task import TaskStatus
from microin.models.user import User
from microin.services.seed_data import demo_tasks, demo_users
from microin.services.task_store import TaskStore

from .conftest import FIXED_TODAY


def _create(store: TaskStore, **overrides):
    fields = dict(
        title="X",
        description="d",
        skills=["Go"],
        reward=100,
        reward_token="USDC",
        company="Acme",
    )
    fields.update(overrides)
    return store.create_task(**fields)


def test_create_task_is_open_and_unassigned(store: TaskStore) -> None:
    task = _create(store)

    assert task.id
    assert task.status is TaskStatus.OPEN
    assert task.assignee is None
    assert store.get_task(task.id).status is TaskStatus.OPEN


def test_create_task_inserts_newest_first(store: TaskStore) -> None:
    first = _create(store, title="first")
    second = _create(store, title="second")

    assert [t.id for t in store.list_tasks()] == [second.id, first.id]


def test_create_task_does_not_validate_reward_or_skills(store: TaskStore) -> None:
    task = _create(store, reward=-5, skills=[])

    assert task.reward == -5
    assert task.skills == []


def test_create_task_ids_are_unique(store: TaskStore) -> None:
    ids = {_create(store).id for _ in range(50)}
    assert len(ids) == 50


def test_returned_entities_are_copies(store: TaskStore, student: User) -> None:
    task = _create(store)
    task.title = "mutated"
    task.skills.append("Rust")

    fresh = store.get_task(task.id)
    assert fresh.title == "X"
    assert fresh.skills == ["Go"]

    user = store.get_user("0xAAA")
    user.skills.clear()
    assert store.get_user("0xAAA").skills == ["Go", "Python"]


def test_get_user_missing_raises(store: TaskStore) -> None:
    with pytest.raises(NotFoundError):
        store.get_user("0xNOPE")


def test_apply_sets_in_progress_and_assignee(store: TaskStore) -> None:
    task = _create(store)

    applied = store.apply_to_task(task.id, "0xAAA")

    assert applied.status is TaskStatus.IN_PROGRESS
    assert applied.assignee == "0xAAA"


def test_apply_twice_keeps_second_wallet(store: TaskStore) -> None:
    task = _create(store)

    store.apply_to_task(task.id, "0xAAA")
    second = store.apply_to_task(task.id, "0xBBB")

    assert second.status is TaskStatus.IN_PROGRESS
    assert second.assignee == "0xBBB"
    assert store.get_task(task.id).assignee == "0xBBB"


def test_apply_on_completed_task_reopens_to_in_progress(store: TaskStore, student: User) -> None:
    task = _create(store)
    store.apply_to_task(task.id, "0xAAA")
    store.approve_task(task.id)

    again = store.apply_to_task(task.id, "0xBBB")

    assert again.status is TaskStatus.IN_PROGRESS
    assert again.assignee == "0xBBB"


def test_apply_unknown_task_raises(store: TaskStore) -> None:
    with pytest.raises(NotFoundError):
        store.apply_to_task("task-missing", "0xAAA")


def test_approve_unassigned_task_fails_without_mutation(store: TaskStore, student: User) -> None:
    task = _create(store)

    with pytest.raises(NotFoundError):
        store.approve_task(task.id)

    assert store.get_task(task.id).status is TaskStatus.OPEN
    assert store.get_user("0xAAA").portfolio == []


def test_approve_unknown_task_raises(store: TaskStore) -> None:
    with pytest.raises(NotFoundError):
        store.approve_task("task-missing")


def test_approve_completes_task_and_issues_nft(store: TaskStore, student: User) -> None:
    task = _create(store)
    store.apply_to_task(task.id, "0xAAA")

    approved, user = store.approve_task(task.id)

    assert approved.status is TaskStatus.COMPLETED
    assert approved.assignee == "0xAAA"
    assert (approved.title, approved.company, approved.reward) == ("X", "Acme", 100)

    assert user is not None
    assert len(user.portfolio) == 1
    nft = user.portfolio[0]
    assert nft.task_id == task.id
    assert nft.task_title == "X"
    assert nft.issue_date == FIXED_TODAY
    assert nft.image_url == f"https://picsum.photos/seed/{task.id}/500/500"
    assert store.get_user("0xAAA").portfolio == user.portfolio


def test_approve_prepends_to_existing_portfolio(store: TaskStore, student: User) -> None:
    older = _create(store, title="older")
    newer = _create(store, title="newer")
    for t in (older, newer):
        store.apply_to_task(t.id, "0xAAA")

    store.approve_task(older.id)
    _, user = store.approve_task(newer.id)

    assert [n.task_title for n in user.portfolio] == ["newer", "older"]


def test_approve_twice_issues_a_single_nft(store: TaskStore, student: User) -> None:
    task = _create(store)
    store.apply_to_task(task.id, "0xAAA")

    store.approve_task(task.id)
    _, user = store.approve_task(task.id)

    assert len(user.portfolio) == 1


def test_approve_with_unknown_assignee_completes_without_user(store: TaskStore) -> None:
    task = _create(store)
    store.apply_to_task(task.id, "0xAAA")

    approved, user = store.approve_task(task.id)

    assert approved.status is TaskStatus.COMPLETED
    assert user is None
    assert store.get_task(task.id).status is TaskStatus.COMPLETED


def test_full_lifecycle_scenario(store: TaskStore) -> None:
    store.add_user(User(wallet_address="0xAAA", name="Student"))

    task = _create(store)
    assert task.id != "" and task.status is TaskStatus.OPEN

    applied = store.apply_to_task(task.id, "0xAAA")
    assert applied.status is TaskStatus.IN_PROGRESS and applied.assignee == "0xAAA"

    approved, user = store.approve_task(task.id)
    assert approved.status is TaskStatus.COMPLETED
    assert len(user.portfolio) == 1
    assert user.portfolio[0].task_id == task.id


def test_concurrent_creates_are_all_kept(store: TaskStore) -> None:
    def worker():
        for _ in range(25):
            _create(store)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.counts()["tasks"] == 200


def test_load_keeps_order_and_lists_users(store: TaskStore) -> None:
    store.load(tasks=demo_tasks(), users=demo_users())

    assert [t.id for t in store.list_tasks()] == ["t1", "t2", "t4", "t5"]
    assert {u.wallet_address for u in store.list_users()} == {"0x1234...AbCd", "0x5678...EfGh"}


def test_approve_for_company_assignee_issues_no_nft(store: TaskStore, company: User) -> None:
    task = _create(store)
    store.apply_to_task(task.id, "0xC0")

    approved, user = store.approve_task(task.id)

    assert approved.status is TaskStatus.COMPLETED
    assert user is not None and user.is_company
    assert user.portfolio == []
    assert store.get_user("0xC0").portfolio == []


def test_newest_first_after_seed_load(store: TaskStore) -> None:
    store.load(tasks=demo_tasks())

    created = _create(store, title="fresh")

    assert [t.id for t in store.list_tasks()] == [created.id, "t1", "t2", "t4", "t5"]
