from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from ..extensions import db
from ..models import TranscriptionProvider
from ..serializers import serialize_api_key
from ..services.credentials import CredentialStore
from .schemas import SaveApiKeyRequest

bp = Blueprint("settings_api", __name__)


def _store():
    return CredentialStore(db.session)


@bp.get("/api/settings/keys")
@login_required
def list_keys():
    return jsonify({"data": [serialize_api_key(k) for k in _store().list_keys(current_user.id)]})


@bp.post("/api/settings/keys")
@login_required
def save_key():
    body = SaveApiKeyRequest.model_validate(request.get_json(silent=True) or {})
    record = _store().save_key(current_user.id, body.provider, body.api_key, body.nickname)
    return jsonify({"data": serialize_api_key(record)}), 201


@bp.delete("/api/settings/keys")
@login_required
def delete_key():
    raw = (request.args.get("provider") or "").strip().upper()
    if not raw:
        return jsonify({"error": "provider is required"}), 400
    try:
        provider = TranscriptionProvider(raw)
    except ValueError:
        return jsonify({"error": "invalid provider"}), 400
    _store().delete_key(current_user.id, provider)
    return jsonify({"success": True})


@bp.get("/api/settings/providers")
@login_required
def list_providers():
    return jsonify({"data": current_app.extensions["provider_registry"].list_providers()})
