"""
Web Routes - Timeline, archive and the content forms
"""
import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ondocket.constants import (
    BUILD_VERSION,
    CONTENT_TYPES,
    FIELD_POST_TITLE,
    FIELD_PUBLICATION_DATE,
    RECORD_FIELDS,
    TYPE_FILTER_ALL,
)
from ondocket.dates import format_date, priority_badge
from ondocket.exceptions import OnDocketException, OutOfRangeException, StorageException
from ondocket.projections import available_types, normalize_order, project_archive, project_upcoming
from ondocket.routes import get_record_store, get_view_settings

logger = logging.getLogger("main")
web_bp = Blueprint("web", __name__)


@web_bp.app_template_filter("format_date")
def format_date_filter(value):
    return format_date(value)


@web_bp.app_context_processor
def inject_helpers():
    return {
        "priority_badge": priority_badge,
        "build_version": BUILD_VERSION,
    }


def _load_records():
    """Full collection, or an empty list plus a flash message when storage fails"""
    try:
        return get_record_store().list_all()
    except StorageException:
        flash("Failed to load contents", "error")
        return []


def _form_payload():
    # Every field is submitted, empty inputs as empty strings
    return {field: request.form.get(field, "").strip() for field in RECORD_FIELDS}


def _missing_required(payload):
    return not payload[FIELD_POST_TITLE] or not payload[FIELD_PUBLICATION_DATE]


def _render_form(mode, form, total, index=None, status_code=200):
    return render_template(
        "content_form.html",
        title="New Content" if mode == "create" else "Edit Content",
        active_section=mode,
        mode=mode,
        form=form,
        index=index,
        content_types=CONTENT_TYPES,
        total=total,
    ), status_code


@web_bp.route("/")
def timeline():
    """Content scheduled for the next 14 days"""
    records = _load_records()
    order = normalize_order(request.args.get("order"), get_view_settings()["timeline_order"])
    type_filter = request.args.get("type") or TYPE_FILTER_ALL
    items = project_upcoming(records, order=order, type_filter=type_filter)
    return render_template(
        "timeline.html",
        title="Upcoming Content",
        active_section="timeline",
        items=items,
        total=len(records),
        types=available_types(records),
        order=order,
        type_filter=type_filter,
    )


@web_bp.route("/archive")
def archive():
    """Published content with search and type filter"""
    records = _load_records()
    order = normalize_order(request.args.get("order"), get_view_settings()["archive_order"])
    type_filter = request.args.get("type") or TYPE_FILTER_ALL
    search = request.args.get("q", "")
    items = project_archive(records, order=order, search=search, type_filter=type_filter)
    return render_template(
        "archive.html",
        title="Publications Archive",
        active_section="archive",
        items=items,
        total=len(records),
        types=available_types(records),
        order=order,
        type_filter=type_filter,
        search=search,
    )


@web_bp.route("/create", methods=["GET", "POST"])
def create():
    store = get_record_store()
    if request.method == "GET":
        return _render_form("create", {field: "" for field in RECORD_FIELDS}, len(_load_records()))

    payload = _form_payload()
    if _missing_required(payload):
        flash("Title and Date are required", "error")
        return _render_form("create", payload, len(_load_records()), status_code=400)

    try:
        store.append(payload)
    except OnDocketException as e:
        logger.error(f"Error saving content: {e.message}")
        flash("Error saving content", "error")
        return _render_form("create", payload, len(_load_records()), status_code=e.status_code)

    flash("Content created successfully!", "success")
    return redirect(url_for("web.timeline"))


@web_bp.route("/edit/<int:index>", methods=["GET", "POST"])
def edit(index):
    store = get_record_store()
    if request.method == "GET":
        try:
            record = store.get_at(index)
        except OnDocketException as e:
            flash("Content not found" if isinstance(e, OutOfRangeException) else "Failed to load contents", "error")
            return redirect(url_for("web.timeline"))
        form = {field: "" for field in RECORD_FIELDS}
        form.update({key: value for key, value in record.model_dump(by_alias=True).items() if key in form and value is not None})
        return _render_form("edit", form, len(_load_records()), index=index)

    payload = _form_payload()
    if _missing_required(payload):
        flash("Title and Date are required", "error")
        return _render_form("edit", payload, len(_load_records()), index=index, status_code=400)

    try:
        store.replace_at(index, payload)
    except OnDocketException as e:
        logger.error(f"Error updating content at index {index}: {e.message}")
        flash("Error updating content", "error")
        return _render_form("edit", payload, len(_load_records()), index=index, status_code=e.status_code)

    flash("Content updated successfully!", "success")
    return redirect(url_for("web.timeline"))


@web_bp.route("/delete/<int:index>", methods=["POST"])
def delete(index):
    try:
        get_record_store().remove_at(index)
    except OnDocketException as e:
        logger.error(f"Error deleting content at index {index}: {e.message}")
        flash("Error deleting content", "error")
    else:
        flash("Content deleted", "success")
    return redirect(url_for("web.timeline"))
