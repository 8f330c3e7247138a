"""Flask application for the PropIntel underwriting backend."""

import os
import json
import uuid
import logging
from flask import Flask, Response, request, jsonify, stream_with_context
from werkzeug.utils import secure_filename

from config import (
    UPLOAD_DIR, PORT, DEBUG, SECRET_KEY, CORS_ORIGIN, HISTORY_LIMIT, REPORT_FILENAME,
)
from services.pdf_generator import generate_pdf, iter_chunks
from services.property_data import lookup_property, mock_property_info
from services.report_history import ReportHistory, SavedReport
from services.report_layout.errors import LayoutError, SinkWriteError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = SECRET_KEY

# In-memory store
history = ReportHistory()

RETURN_ESTIMATE = 0.08


def _payload() -> dict:
    """JSON body or form fields, whichever the client sent."""
    if not request.is_json:
        return request.form.to_dict()
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data


def _address(data: dict) -> str:
    address = str(data.get("address") or "").strip()
    if not address:
        raise ValueError("address is required")
    return address


def _assumptions(raw) -> dict:
    """Assumptions arrive as an object (JSON) or a JSON string (multipart)."""
    if not raw:
        return {}
    if isinstance(raw, dict):
        return raw
    try:
        parsed = json.loads(raw)
    except (ValueError, TypeError):
        raise ValueError("assumptions must be a JSON object") from None
    if not isinstance(parsed, dict):
        raise ValueError("assumptions must be a JSON object")
    return parsed


def _save_uploads(files) -> list[dict]:
    saved = []
    for upload in files:
        if upload and upload.filename:
            filename = f"{uuid.uuid4().hex[:8]}_{secure_filename(upload.filename)}"
            save_path = os.path.join(UPLOAD_DIR, filename)
            upload.save(save_path)
            saved.append({"filename": filename, "originalname": upload.filename, "path": save_path})
            logger.info(f"Upload saved to {save_path}")
    return saved


@app.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = CORS_ORIGIN
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


# --- Routes ---

@app.route("/api/property/info", methods=["POST"])
def property_info():
    try:
        address = _address(_payload())
    except ValueError as e:
        return jsonify({"error": f"Invalid input: {e}"}), 400
    return jsonify({"address": address, **mock_property_info()})


@app.route("/api/property/underwrite", methods=["POST"])
def underwrite():
    try:
        data = _payload()
        address = _address(data)
        assumptions = _assumptions(data.get("assumptions"))
        record = lookup_property(address)
    except ValueError as e:
        logger.warning(f"Rejected underwrite request: {e}")
        return jsonify({"error": f"Invalid input: {e}"}), 400

    files = _save_uploads(request.files.getlist("files"))
    summary = record.risk_label
    report_data = {**record.to_dict(), "summary": summary, "files": files}
    history.add(SavedReport(address=address, summary=summary, record=record.to_dict(), files=files))
    logger.info(f"Underwrote '{address}': {summary}, {len(files)} file(s)")

    return jsonify({
        **report_data,
        "assumptions": assumptions,
        "returnEstimate": RETURN_ESTIMATE,
    })


@app.route("/api/property/report", methods=["POST"])
def report():
    try:
        data = _payload()
        address = _address(data)
        overrides = {k: v for k, v in data.items() if k != "address"}
        record = lookup_property(address, overrides)
    except ValueError as e:
        logger.warning(f"Rejected report request: {e}")
        return jsonify({"error": f"Invalid input: {e}"}), 400

    # Render completely before streaming so a failed render never reaches
    # the client as a truncated file.
    try:
        pdf_bytes = generate_pdf(record)
    except (LayoutError, SinkWriteError) as e:
        logger.exception(f"Report rendering failed for '{address}'")
        return jsonify({"error": f"Report generation failed: {e}"}), 500

    return Response(
        stream_with_context(iter_chunks(pdf_bytes)),
        mimetype="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"',
            "Content-Length": str(len(pdf_bytes)),
        },
    )


@app.route("/api/history")
def get_history():
    """Most recent underwriting runs, newest first."""
    return jsonify([r.to_summary() for r in history.recent(HISTORY_LIMIT)])


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT, debug=DEBUG, use_reloader=False)
