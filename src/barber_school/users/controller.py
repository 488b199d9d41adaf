from __future__ import annotations

import logging

from flask import Flask, session

from ..common.http import json_body, login_required, ok
from ..container import Container
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = True
        session["user_id"] = user.user_id
        session["name"] = user.full_name
        session["role"] = user.role.value
        logger.info("User %s logged in", user.user_id)
        return ok(user.to_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        # Account may have been disabled since login.
        user = container.users_repo.get_by_id(int(session["user_id"]))
        if not user or not user.is_active:
            session.clear()
            raise AuthenticationError("Please log in to continue")
        return ok({"user_id": user.user_id, "full_name": user.full_name, "role": user.role.value})
