"""
Contents API - CRUD over the collection plus read-only projections
"""
from flask import Blueprint, jsonify, request

from ondocket.api_responses import handle_api_errors, success_response
from ondocket.constants import BUILD_VERSION, TYPE_FILTER_ALL
from ondocket.dates import days_until, priority_badge
from ondocket.exceptions import ValidationException
from ondocket.projections import normalize_order, project_archive, project_upcoming
from ondocket.routes import get_record_store, get_view_settings
from ondocket.store import validate_index

contents_bp = Blueprint("contents", __name__, url_prefix="/api")


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationException("Request body must be a JSON object")
    return body


def _serialize_projection(items):
    data = []
    for item in items:
        badge = priority_badge(item.record.publication_date)
        data.append({
            "index": item.index,
            "record": item.record.to_payload(),
            "days_until": days_until(item.record.publication_date),
            "badge": badge.label if badge else None,
        })
    return data


@contents_bp.route("/contents", methods=["GET"])
@handle_api_errors("Failed to read contents")
def list_contents():
    """Return the full collection as a JSON array"""
    records = get_record_store().list_all()
    return jsonify([record.to_payload() for record in records])


@contents_bp.route("/contents", methods=["POST"])
@handle_api_errors("Failed to save content")
def create_content():
    """Append a record to the collection"""
    index = get_record_store().append(_json_body())
    return success_response(status_code=201, index=index)


@contents_bp.route("/contents", methods=["PUT"])
@handle_api_errors("Failed to update content")
def update_content():
    """Replace the record at {"index": n} with {"data": {...}}"""
    body = _json_body()
    index = validate_index(body.get("index"))
    get_record_store().replace_at(index, body.get("data"))
    return success_response()


@contents_bp.route("/contents", methods=["DELETE"])
@handle_api_errors("Failed to delete content")
def delete_content():
    """Remove the record at {"index": n}"""
    index = validate_index(_json_body().get("index"))
    get_record_store().remove_at(index)
    return success_response()


@contents_bp.route("/contents/upcoming", methods=["GET"])
@handle_api_errors("Failed to read contents")
def upcoming_contents():
    items = project_upcoming(
        get_record_store().list_all(),
        order=normalize_order(request.args.get("order"), get_view_settings()["timeline_order"]),
        type_filter=request.args.get("type") or TYPE_FILTER_ALL,
    )
    return success_response(data=_serialize_projection(items), total=len(items))


@contents_bp.route("/contents/archive", methods=["GET"])
@handle_api_errors("Failed to read contents")
def archive_contents():
    items = project_archive(
        get_record_store().list_all(),
        order=normalize_order(request.args.get("order"), get_view_settings()["archive_order"]),
        search=request.args.get("q", ""),
        type_filter=request.args.get("type") or TYPE_FILTER_ALL,
    )
    return success_response(data=_serialize_projection(items), total=len(items))


@contents_bp.route("/health", methods=["GET"])
@handle_api_errors("Storage unavailable")
def health():
    return jsonify({
        "status": "healthy",
        "records": get_record_store().count(),
        "version": BUILD_VERSION,
    })
