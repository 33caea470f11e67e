from __future__ import annotations

from flask import Flask, current_app

from ..common.validators import optional_int
from ..common.web import current_session, dump, enum_arg, is_confirmed, json_body, load_actor, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role, UserStatus
from ..core.syllabus import next_lesson


def _user_payload(user):
    data = dump(user)
    data["is_frozen"] = user.is_frozen
    data["strikes_left"] = user.strikes_left
    if user.role == Role.TRAINEE:
        upcoming = next_lesson(user.current_lesson)
        data["next_lesson"] = dump(upcoming) if upcoming else None
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.login(data.get("email", ""), data.get("password", ""), session=current_session())
        current_app.logger.info("login user=%s role=%s", user.id, user.role.value)
        return ok(user=_user_payload(user))

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = json_body()
        user = container.auth_service.signup(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=enum_arg(Role, data.get("role", Role.TRAINEE.value), "תפקיד"),
            session=current_session(),
            phone=data.get("phone"),
            age=optional_int(data.get("age"), "גיל"),
            background=data.get("background"),
        )
        current_app.logger.info("signup user=%s role=%s", user.id, user.role.value)
        return ok(201, user=_user_payload(user))

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.auth_service.logout(session=current_session())
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(user=_user_payload(load_actor(container.users_repo)))

    @app.route("/api/me", methods=["PATCH"], endpoint="update_profile")
    @login_required
    def update_profile():
        data = json_body()
        actor = load_actor(container.users_repo)
        user = container.user_service.update_profile(
            actor.id,
            session=current_session(),
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            background=data.get("background"),
        )
        return ok(user=_user_payload(user))

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @roles_required(Role.ADMIN, Role.STAFF)
    def list_users():
        return ok(users=[_user_payload(u) for u in container.user_service.list_users()])

    @app.route("/api/instructors", methods=["GET"], endpoint="list_instructors")
    @login_required
    def list_instructors():
        return ok(instructors=[_user_payload(u) for u in container.user_service.list_instructors()])

    @app.route("/api/users/<user_id>/progress", methods=["PATCH"], endpoint="update_progress")
    @roles_required(Role.ADMIN, Role.STAFF)
    def update_progress(user_id: str):
        data = json_body()
        actor = load_actor(container.users_repo)
        status = data.get("status")
        user = container.user_service.update_training_progress(
            user_id,
            current_role=actor.role,
            status=enum_arg(UserStatus, status, "סטטוס") if status else None,
            current_lesson=optional_int(data.get("current_lesson"), "מספר שיעור"),
        )
        return ok(user=_user_payload(user))

    @app.route("/api/users/<user_id>/no-show", methods=["POST"], endpoint="report_no_show")
    @roles_required(Role.ADMIN, Role.STAFF)
    def report_no_show(user_id: str):
        user = container.discipline_service.increment_no_show(user_id)
        current_app.logger.info("no-show recorded user=%s count=%s", user.id, user.no_show_count)
        return ok(user=_user_payload(user))

    @app.route("/api/users/<user_id>/no-show", methods=["DELETE"], endpoint="remove_no_show")
    @roles_required(Role.ADMIN, Role.STAFF)
    def remove_no_show(user_id: str):
        data = json_body()
        actor = load_actor(container.users_repo)
        user = container.discipline_service.remove_no_show_strike(
            user_id,
            data.get("reason", ""),
            data.get("notes"),
            current_role=actor.role,
            confirmed=is_confirmed(data),
        )
        if user is None:
            return ok(changed=False)
        return ok(changed=True, user=_user_payload(user))

    @app.route("/api/users/<user_id>/unfreeze", methods=["POST"], endpoint="unfreeze_user")
    @roles_required(Role.ADMIN)
    def unfreeze_user(user_id: str):
        data = json_body()
        actor = load_actor(container.users_repo)
        user = container.discipline_service.unfreeze(user_id, current_role=actor.role, confirmed=is_confirmed(data))
        current_app.logger.info("unfreeze user=%s by=%s", user.id, actor.id)
        return ok(user=_user_payload(user))

    @app.route("/api/users/<user_id>/freeze", methods=["POST"], endpoint="freeze_user")
    @roles_required(Role.ADMIN)
    def freeze_user(user_id: str):
        data = json_body()
        actor = load_actor(container.users_repo)
        user = container.discipline_service.freeze(
            user_id,
            current_role=actor.role,
            actor_id=actor.id,
            reason=data.get("reason", ""),
            confirmed=is_confirmed(data),
        )
        current_app.logger.info("freeze user=%s by=%s", user.id, actor.id)
        return ok(user=_user_payload(user))
