from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import json_body, login_required, mutation_response, to_payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _timetables():
        return container.sessions.get(session["user_id"]).timetables

    @app.route("/api/timetables", methods=["GET"], endpoint="timetables_list")
    @login_required
    def timetables_list():
        return jsonify({"success": True, "data": to_payload(_timetables().list())})

    @app.route("/api/timetables", methods=["POST"], endpoint="timetables_create")
    @login_required
    def timetables_create():
        return mutation_response(_timetables().add(json_body().get("name", "")), 201)

    @app.route("/api/timetables/<timetable_id>", methods=["DELETE"], endpoint="timetables_delete")
    @login_required
    def timetables_delete(timetable_id: str):
        return mutation_response(_timetables().delete(timetable_id))

    @app.route("/api/timetables/<timetable_id>/activate", methods=["POST"], endpoint="timetables_activate")
    @login_required
    def timetables_activate(timetable_id: str):
        return mutation_response(_timetables().set_active(timetable_id))

    @app.route("/api/timetables/<timetable_id>/slots", methods=["POST"], endpoint="timetables_add_slot")
    @login_required
    def timetables_add_slot(timetable_id: str):
        data = json_body()
        mutation = _timetables().add_slot(
            timetable_id,
            subject_id=data.get("subjectId", ""),
            day_of_week=data.get("dayOfWeek"),
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime", ""),
        )
        return mutation_response(mutation, 201)

    @app.route("/api/timetables/<timetable_id>/slots/<slot_id>", methods=["DELETE"], endpoint="timetables_remove_slot")
    @login_required
    def timetables_remove_slot(timetable_id: str, slot_id: str):
        return mutation_response(_timetables().remove_slot(timetable_id, slot_id))
