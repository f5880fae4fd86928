from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import json_body, login_required, mutation_response, to_payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _subjects():
        return container.sessions.get(session["user_id"]).subjects

    @app.route("/api/subjects", methods=["GET"], endpoint="subjects_list")
    @login_required
    def subjects_list():
        return jsonify({"success": True, "data": to_payload(_subjects().list())})

    @app.route("/api/subjects", methods=["POST"], endpoint="subjects_create")
    @login_required
    def subjects_create():
        data = json_body()
        return mutation_response(_subjects().add(data.get("name", ""), data.get("color", "")), 201)

    @app.route("/api/subjects/<subject_id>", methods=["PUT"], endpoint="subjects_update")
    @login_required
    def subjects_update(subject_id: str):
        data = json_body()
        return mutation_response(_subjects().update(subject_id, data.get("name", ""), data.get("color", "")))

    @app.route("/api/subjects/<subject_id>", methods=["DELETE"], endpoint="subjects_delete")
    @login_required
    def subjects_delete(subject_id: str):
        return mutation_response(_subjects().delete(subject_id))
