# microin/blueprints/api/users.py
from flask import jsonify

from ...models.task import TaskStatus
from ...services.recommendation_service import merge_recommendations
from . import api_bp
from .utils import get_recommender, get_store


@api_bp.get("/users/<wallet_address>")
def user_detail(wallet_address):
    return jsonify(get_store().get_user(wallet_address).to_dict())


@api_bp.get("/users/<wallet_address>/marketplace")
def user_marketplace(wallet_address):
    """Student marketplace: tailored recommendations plus every Open task."""
    store = get_store()
    user = store.get_user(wallet_address)
    tasks = store.list_tasks()

    recommended = []
    if user.skills and not user.is_company:
        recommended = merge_recommendations(get_recommender().recommend(user.skills), tasks)

    return jsonify({
        "recommended": [t.to_dict() for t in recommended],
        "openTasks": [t.to_dict() for t in tasks if t.status is TaskStatus.OPEN],
    })
