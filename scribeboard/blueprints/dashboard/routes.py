from flask import abort, render_template
from flask_login import current_user, login_required
from . import bp
from ...services.export import format_timestamp
from ...services.transcriptions import get_transcription_service


@bp.route("/")
@login_required
def index():
    jobs = get_transcription_service().list_for_user(current_user.id)
    return render_template("dashboard/index.html", jobs=jobs)


@bp.route("/transcriptions/<int:transcription_id>")
@login_required
def detail(transcription_id):
    detail = get_transcription_service().get_with_segments(transcription_id, current_user.id)
    if detail is None:
        abort(404)
    speakers = {s.id: s.display_name for s in detail.speakers}
    return render_template(
        "dashboard/detail.html",
        job=detail.transcription,
        detail=detail,
        speakers=speakers,
        format_timestamp=format_timestamp,
    )
