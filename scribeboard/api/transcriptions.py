from flask import Blueprint, Response, jsonify, request
from flask_login import current_user, login_required

from ..exceptions import TranscriptionNotFoundError
from ..jobs.transcribe import submit_transcription
from ..serializers import serialize_detail, serialize_speaker, serialize_transcription
from ..services.export import DOCX_MIMETYPE, export_docx, export_text
from ..services.transcriptions import get_transcription_service
from .schemas import CreateTranscriptionRequest, RenameSpeakerRequest, UpdateTranscriptionRequest

bp = Blueprint("transcriptions_api", __name__)

LIST_LIMIT = 50


def _detail_or_404(service, transcription_id):
    detail = service.get_with_segments(transcription_id, current_user.id)
    if detail is None:
        raise TranscriptionNotFoundError(transcription_id)
    return detail


@bp.get("/api/transcriptions")
@login_required
def list_transcriptions():
    jobs = get_transcription_service().list_for_user(current_user.id, LIST_LIMIT)
    return jsonify({"data": [serialize_transcription(j) for j in jobs]})


@bp.post("/api/transcriptions")
@login_required
def create_transcription():
    body = CreateTranscriptionRequest.model_validate(request.get_json(silent=True) or {})
    service = get_transcription_service()
    job = service.create_job(
        user_id=current_user.id,
        audio_asset_id=body.audio_asset_id,
        provider=body.provider,
        model=body.model,
        prompt_template=body.prompt_template,
        custom_prompt=body.custom_prompt,
        language=body.language,
        diarize=body.diarize,
        additional_config=body.additional_config,
    )
    # serialize before submitting so the response reflects the job as created
    data = serialize_transcription(job)
    submit_transcription(job.id)
    return jsonify({"data": data}), 201


@bp.get("/api/transcriptions/<int:transcription_id>")
@login_required
def get_transcription(transcription_id):
    detail = _detail_or_404(get_transcription_service(), transcription_id)
    return jsonify({"data": serialize_detail(detail)})


@bp.patch("/api/transcriptions/<int:transcription_id>")
@login_required
def update_transcription(transcription_id):
    body = UpdateTranscriptionRequest.model_validate(request.get_json(silent=True) or {})
    service = get_transcription_service()
    service.update_metadata(transcription_id, current_user.id, body.changes())
    return jsonify({"data": serialize_detail(_detail_or_404(service, transcription_id))})


@bp.post("/api/transcriptions/<int:transcription_id>/process")
@login_required
def reprocess_transcription(transcription_id):
    detail = _detail_or_404(get_transcription_service(), transcription_id)
    submit_transcription(detail.transcription.id)
    return jsonify({"data": {"id": detail.transcription.id, "submitted": True}}), 202


@bp.patch("/api/transcriptions/<int:transcription_id>/speakers/<int:speaker_id>")
@login_required
def rename_speaker(transcription_id, speaker_id):
    body = RenameSpeakerRequest.model_validate(request.get_json(silent=True) or {})
    speaker = get_transcription_service().rename_speaker(
        transcription_id, current_user.id, speaker_id, body.display_name
    )
    return jsonify({"data": serialize_speaker(speaker)})


@bp.get("/api/transcriptions/<int:transcription_id>/export")
@login_required
def export_transcription(transcription_id):
    detail = _detail_or_404(get_transcription_service(), transcription_id)
    fmt = request.args.get("format", "txt")
    if fmt == "docx":
        return Response(
            export_docx(detail),
            mimetype=DOCX_MIMETYPE,
            headers={"Content-Disposition": f"attachment; filename=transcription-{transcription_id}.docx"},
        )
    return Response(
        export_text(detail),
        content_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename=transcription-{transcription_id}.txt"},
    )
