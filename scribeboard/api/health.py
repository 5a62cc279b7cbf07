from flask import Blueprint, jsonify

bp = Blueprint("health_api", __name__)


@bp.get("/api/health")
def health():
    return jsonify({"status": "ok"})
