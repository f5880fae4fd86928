from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import json_body, login_required, mutation_response
from ..core.exceptions import AuthenticationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/session", methods=["POST"], endpoint="session_open")
    def session_open():
        """Bind the Flask session to a user id vouched for by the auth provider."""
        user_id = str(json_body().get("userId") or "").strip()
        if not user_id:
            raise AuthenticationError("userId is required")

        session.clear()
        session["user_id"] = user_id
        container.sessions.get(user_id)
        return jsonify({"success": True, "data": {"userId": user_id}})

    @app.route("/api/session", methods=["DELETE"], endpoint="session_close")
    @login_required
    def session_close():
        container.sessions.close(session.pop("user_id"))
        return jsonify({"success": True})

    @app.route("/api/profile", methods=["GET"], endpoint="profile_get")
    @login_required
    def profile_get():
        return jsonify({"success": True, "data": container.sessions.get(session["user_id"]).profile.get().to_dict()})

    @app.route("/api/profile", methods=["PUT"], endpoint="profile_update")
    @login_required
    def profile_update():
        user_session = container.sessions.get(session["user_id"])
        return mutation_response(user_session.profile.set_user_name(json_body().get("userName", "")))
