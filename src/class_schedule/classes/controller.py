from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import json_body, login_required, mutation_response, to_payload
from ..core.constants import MAX_HORIZON_MONTHS, MIN_HORIZON_MONTHS
from ..core.exceptions import PreconditionError, ValidationError
from ..container import Container
from .queries import format_time_until


def register(app: Flask, container: Container) -> None:
    def _session():
        return container.sessions.get(session["user_id"])

    @app.route("/api/classes", methods=["GET"], endpoint="classes_list")
    @login_required
    def classes_list():
        day_s = request.args.get("date")
        try:
            day = parse_iso_date(day_s) if day_s else None
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD") from None
        return jsonify({"success": True, "data": to_payload(_session().schedule.list_classes(day=day))})

    @app.route("/api/classes/generate", methods=["POST"], endpoint="classes_generate")
    @login_required
    def classes_generate():
        data = json_body()
        try:
            months = int(data.get("months", container.default_horizon_months))
        except (TypeError, ValueError):
            raise ValidationError("months must be a number") from None
        if not MIN_HORIZON_MONTHS <= months <= MAX_HORIZON_MONTHS:
            raise ValidationError(f"months must be between {MIN_HORIZON_MONTHS} and {MAX_HORIZON_MONTHS}")

        user_session = _session()
        active = user_session.timetables.active()
        if active is None:
            raise PreconditionError("Create or activate a timetable first")
        if user_session.schedule.has_recorded_attendance(active.id) and not data.get("overwrite"):
            raise PreconditionError("Regenerating discards recorded attendance; resend with overwrite=true")

        return mutation_response(user_session.schedule.generate(months), 201)

    @app.route("/api/classes/today", methods=["GET"], endpoint="classes_today")
    @login_required
    def classes_today():
        return jsonify({"success": True, "data": to_payload(_session().schedule.today())})

    @app.route("/api/classes/upcoming", methods=["GET"], endpoint="classes_upcoming")
    @login_required
    def classes_upcoming():
        now = now_local()
        upcoming = _session().schedule.upcoming(now=now)
        if upcoming is None:
            return jsonify({"success": True, "data": None})
        return jsonify({"success": True, "data": upcoming.to_dict(), "timeUntil": format_time_until(upcoming, now)})

    @app.route("/api/classes/holiday", methods=["POST"], endpoint="classes_holiday")
    @login_required
    def classes_holiday():
        return mutation_response(_session().lifecycle.mark_today_as_holiday())

    @app.route("/api/classes/<class_id>/status", methods=["POST"], endpoint="classes_status")
    @login_required
    def classes_status(class_id: str):
        return mutation_response(_session().lifecycle.update_status(class_id, json_body().get("status", "")))

    @app.route("/api/classes/<class_id>/attendance", methods=["POST"], endpoint="classes_attendance")
    @login_required
    def classes_attendance(class_id: str):
        attended = json_body().get("attended")
        if not isinstance(attended, bool):
            raise ValidationError("attended must be true or false")
        return mutation_response(_session().lifecycle.mark_attendance(class_id, attended))

    @app.route("/api/classes/<class_id>/attendance", methods=["DELETE"], endpoint="classes_attendance_reset")
    @login_required
    def classes_attendance_reset(class_id: str):
        return mutation_response(_session().lifecycle.reset_attendance(class_id))

    @app.route("/api/classes/<class_id>/reset", methods=["POST"], endpoint="classes_reset")
    @login_required
    def classes_reset(class_id: str):
        return mutation_response(_session().lifecycle.reset_class_status(class_id))

    @app.route("/api/stats", methods=["GET"], endpoint="stats")
    @login_required
    def stats():
        subject_id = request.args.get("subject_id") or None
        return jsonify({"success": True, "data": _session().schedule.stats(subject_id).to_dict()})

    @app.route("/api/stats/subjects", methods=["GET"], endpoint="stats_by_subject")
    @login_required
    def stats_by_subject():
        data = {}
        for subject_id, s in _session().schedule.stats_by_subject().items():
            data[subject_id] = {**s.to_dict(), "goodStanding": s.meets_threshold()}
        return jsonify({"success": True, "data": data})
