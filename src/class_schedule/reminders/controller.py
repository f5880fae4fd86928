from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import json_body, login_required, mutation_response
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _notifications():
        return container.sessions.get(session["user_id"]).notifications

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications_get")
    @login_required
    def notifications_get():
        return jsonify({"success": True, "data": _notifications().settings.to_dict()})

    @app.route("/api/notifications", methods=["PUT"], endpoint="notifications_update")
    @login_required
    def notifications_update():
        data = json_body()
        enabled = data.get("enabled")
        notifications = _notifications()
        if enabled is True:
            notifications.request_permission()
        try:
            mutation = notifications.update_settings(
                enabled=enabled,
                before_class_minutes=data.get("beforeClassMinutes"),
                after_class_minutes=data.get("afterClassMinutes"),
            )
        except (TypeError, ValueError):
            raise ValidationError("Reminder minutes must be numbers") from None
        return mutation_response(mutation)
