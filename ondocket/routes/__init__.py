from flask import current_app


def get_record_store():
    """Record store bound to the running application"""
    return current_app.record_store


def get_view_settings():
    return current_app.config["ONDOCKET_SETTINGS"]["views"]
