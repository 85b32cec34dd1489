# microin/blueprints/api/recommendations.py
from flask import jsonify

from ...services.recommendation_service import merge_recommendations
from . import api_bp
from .utils import get_recommender, get_store, json_body, require_str_list


@api_bp.post("/recommendations")
def recommendations():
    skills = require_str_list(json_body(), "skills", allow_empty=False)
    # upstream failures come back as [], never as an error
    recommended = get_recommender().recommend(skills)
    fresh = merge_recommendations(recommended, get_store().list_tasks())
    return jsonify([t.to_dict() for t in fresh])
