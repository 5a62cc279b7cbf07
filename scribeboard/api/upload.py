from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from ..serializers import serialize_audio_asset
from ..services.audio import register_upload

bp = Blueprint("upload_api", __name__)


@bp.post("/api/upload")
@login_required
def upload_audio():
    asset = register_upload(
        current_user.id,
        request.files.get("file"),
        duration_seconds=request.form.get("duration_seconds"),
    )
    return jsonify({"data": serialize_audio_asset(asset)}), 201
