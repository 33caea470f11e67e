from __future__ import annotations

from flask import Flask, current_app, request

from ..common.datetime_utils import parse_iso_date, today
from ..common.web import dump, enum_arg, is_confirmed, json_body, load_actor, login_required, ok, roles_required
from ..container import Container
from ..core.enums import DayType, Recurrence, Role, Seat
from ..core.exceptions import ValidationError
from ..core.syllabus import SYLLABUS, lesson_name, lesson_name_en
from .model import Slot, TimeWindow


def _slot_payload(slot: Slot) -> dict:
    data = dump(slot)
    data["occupancy"] = slot.occupancy.value
    data["lesson_name"] = lesson_name(slot.lesson_number) if slot.lesson_number else None
    data["lesson_name_en"] = lesson_name_en(slot.lesson_number) if slot.lesson_number else None
    return data


def _windows(raw) -> list[TimeWindow]:
    if not isinstance(raw, list):
        raise ValidationError("יש להוסיף לפחות משבצת זמן אחת")
    windows = []
    for w in raw:
        if not isinstance(w, dict):
            raise ValidationError("משבצת זמן אינה תקינה")
        windows.append(TimeWindow(start=str(w.get("start", "")), end=str(w.get("end", ""))))
    return windows


def register(app: Flask, container: Container) -> None:
    @app.route("/api/syllabus", methods=["GET"], endpoint="syllabus")
    def syllabus():
        return ok(lessons=list(SYLLABUS))

    @app.route("/api/slots", methods=["GET"], endpoint="list_slots")
    @login_required
    def list_slots():
        """Calendar feed: ?date=YYYY-MM-DD for one day, or ?year=&month= for a month."""
        day = request.args.get("date")
        if day:
            slots = container.slot_service.slots_on(parse_iso_date(day))
        else:
            now = today()
            year = request.args.get("year", type=int) or now.year
            month = request.args.get("month", type=int) or now.month
            slots = container.slot_service.slots_in_month(year, month)
        return ok(slots=[_slot_payload(s) for s in slots])

    @app.route("/api/me/slots", methods=["GET"], endpoint="my_slots")
    @login_required
    def my_slots():
        actor = load_actor(container.users_repo)
        return ok(slots=[_slot_payload(s) for s in container.slot_service.slots_for_user(actor.id)])

    @app.route("/api/slots/open", methods=["GET"], endpoint="open_slots")
    @login_required
    def open_slots():
        return ok(slots=[_slot_payload(s) for s in container.slot_service.open_slots_for_trainees(today())])

    @app.route("/api/slots/<slot_id>", methods=["GET"], endpoint="get_slot")
    @login_required
    def get_slot(slot_id: str):
        return ok(slot=_slot_payload(container.slot_service.get(slot_id)))

    @app.route("/api/slots/<slot_id>/register/<seat>", methods=["POST"], endpoint="register_seat")
    @login_required
    def register_seat(slot_id: str, seat: str):
        actor = load_actor(container.users_repo)
        seat = enum_arg(Seat, seat, "תפקיד במשבצת")
        if seat == Seat.LEAD:
            slot = container.slot_service.register_as_lead(slot_id, actor_id=actor.id)
        elif seat == Seat.SECOND:
            slot = container.slot_service.register_as_second(slot_id, actor_id=actor.id)
        else:
            slot = container.slot_service.register_as_trainee(slot_id, actor_id=actor.id)
        current_app.logger.info("registered slot=%s seat=%s user=%s", slot.id, seat.value, actor.id)
        return ok(slot=_slot_payload(slot))

    @app.route("/api/slots/<slot_id>/register/<seat>", methods=["DELETE"], endpoint="cancel_seat")
    @login_required
    def cancel_seat(slot_id: str, seat: str):
        data = json_body()
        actor = load_actor(container.users_repo)
        slot = container.slot_service.cancel_registration(
            slot_id,
            enum_arg(Seat, seat, "תפקיד במשבצת"),
            actor_id=actor.id,
            confirmed=is_confirmed(data),
        )
        return ok(slot=_slot_payload(slot))

    @app.route("/api/slots/<slot_id>/fast-track", methods=["POST"], endpoint="fast_track")
    @roles_required(Role.ADMIN, Role.STAFF)
    def fast_track(slot_id: str):
        data = json_body()
        actor = load_actor(container.users_repo)
        slot = container.slot_service.fast_track_register(
            slot_id, trainee_id=str(data.get("trainee_id", "")), actor_id=actor.id
        )
        return ok(slot=_slot_payload(slot))

    @app.route("/api/training-days", methods=["POST"], endpoint="create_training_day")
    @roles_required(Role.ADMIN)
    def create_training_day():
        data = json_body()
        actor = load_actor(container.users_repo)
        created = container.slot_service.create_training_day(
            parse_iso_date(str(data.get("date", ""))),
            enum_arg(DayType, data.get("day_type", DayType.NORMAL.value), "סוג יום"),
            _windows(data.get("windows")),
            enum_arg(Recurrence, data.get("recurrence", Recurrence.NONE.value), "חזרתיות"),
            actor_id=actor.id,
        )
        current_app.logger.info("training day created date=%s slots=%d", data.get("date"), len(created))
        return ok(201, slots=[_slot_payload(s) for s in created])

    @app.route("/api/slots/<slot_id>", methods=["DELETE"], endpoint="delete_slot")
    @roles_required(Role.ADMIN)
    def delete_slot(slot_id: str):
        data = json_body()
        actor = load_actor(container.users_repo)
        container.slot_service.delete_slot(slot_id, actor_id=actor.id, confirmed=is_confirmed(data))
        return ok()

    @app.route("/api/slots/<slot_id>/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance(slot_id: str):
        data = json_body()
        if "attended" not in data:
            raise ValidationError("יש לציין האם המתאמן הגיע")
        actor = load_actor(container.users_repo)
        slot = container.slot_service.mark_attendance(slot_id, actor_id=actor.id, attended=bool(data["attended"]))
        return ok(slot=_slot_payload(slot))

    @app.route("/api/slots/<slot_id>/notes", methods=["PUT"], endpoint="save_notes")
    @login_required
    def save_notes(slot_id: str):
        data = json_body()
        actor = load_actor(container.users_repo)
        slot = container.slot_service.save_notes(slot_id, data.get("notes"), actor_id=actor.id)
        return ok(slot=_slot_payload(slot))
