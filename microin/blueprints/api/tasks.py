# microin/blueprints/api/tasks.py
from flask import current_app, jsonify

from . import api_bp
from .utils import get_store, json_body, require_number, require_str, require_str_list


@api_bp.get("/tasks")
def task_list():
    return jsonify([t.to_dict() for t in get_store().list_tasks()])


@api_bp.post("/tasks")
def task_create():
    data = json_body()
    task = get_store().create_task(
        title=require_str(data, "title"),
        description=require_str(data, "description"),
        skills=require_str_list(data, "skills"),
        reward=require_number(data, "reward"),
        reward_token=require_str(data, "rewardToken"),
        company=require_str(data, "company"),
    )
    return jsonify(task.to_dict()), 201


@api_bp.post("/tasks/<task_id>/apply")
def task_apply(task_id):
    user_id = require_str(json_body(), "userId")
    task = get_store().apply_to_task(task_id, user_id)
    current_app.logger.info(f"Task {task_id} applied for by {user_id}")
    return jsonify(task.to_dict())


@api_bp.post("/tasks/<task_id>/approve")
def task_approve(task_id):
    task, user = get_store().approve_task(task_id)
    payload = {"task": task.to_dict()}
    # assignee without a user record: task is completed, no portfolio to return
    if user is not None:
        payload["updatedUser"] = user.to_dict()
    return jsonify(payload)
