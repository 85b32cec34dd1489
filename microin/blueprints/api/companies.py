# microin/blueprints/api/companies.py
from flask import jsonify

from ...models.task import TaskStatus
from . import api_bp
from .utils import get_store


@api_bp.get("/companies/<company>/tasks")
def company_tasks(company):
    mine = [t for t in get_store().list_tasks() if t.company == company]

    def _with(status):
        return [t.to_dict() for t in mine if t.status is status]

    return jsonify({
        "open": _with(TaskStatus.OPEN),
        "inProgress": _with(TaskStatus.IN_PROGRESS),
        "completed": _with(TaskStatus.COMPLETED),
    })
