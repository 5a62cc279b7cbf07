from io import BytesIO

from docx import Document

DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def format_timestamp(ms: int) -> str:
    total = max(int(ms), 0) // 1000
    return f"{total // 3600:02d}:{total % 3600 // 60:02d}:{total % 60:02d}"


def _lines(detail):
    names = {s.id: s.display_name or s.speaker_key for s in detail.speakers}
    for segment in detail.segments:
        if segment.speaker_id:
            name = names.get(segment.speaker_id) or "Speaker"
        else:
            name = segment.speaker_key or "Speaker"
        yield f"{name} – {format_timestamp(segment.start_ms)} – ", segment.text or ""


def export_text(detail) -> str:
    return "\n".join(prefix + text for prefix, text in _lines(detail))


def export_docx(detail) -> bytes:
    document = Document()
    for prefix, text in _lines(detail):
        paragraph = document.add_paragraph()
        paragraph.add_run(prefix).bold = True
        paragraph.add_run(text)
    buf = BytesIO()
    document.save(buf)
    return buf.getvalue()
