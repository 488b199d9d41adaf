from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from barber_school.core.enums import Role
from barber_school.core.exceptions import AuthenticationError
from barber_school.users.model import User
from barber_school.users.service import AuthService


@dataclass
class InMemoryUsers:
    users: dict[str, User]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return next((u for u in self.users.values() if u.user_id == user_id), None)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.users.get(username)


@pytest.fixture
def service():
    users = InMemoryUsers(
        {
            "admin": User(1, "Admin", "admin", generate_password_hash("s3cret"), Role.ADMIN),
            "desk": User(2, "Front Desk", "desk", generate_password_hash("desk"), Role.STAFF),
            "gone": User(3, "Old", "gone", generate_password_hash("pw"), Role.STAFF, is_active=False),
            "seed": User(4, "Seed", "seed", "CHANGE_ME", Role.STAFF),
        }
    )
    return AuthService(users)


def test_login_ok(service):
    user = service.authenticate(" admin ", "s3cret")

    assert user.user_id == 1
    assert user.role == Role.ADMIN
    assert user.to_dict() == {"user_id": 1, "full_name": "Admin", "role": "admin"}


@pytest.mark.parametrize(
    "username, password",
    [("admin", "wrong"), ("nobody", "s3cret"), ("gone", "pw"), ("seed", "CHANGE_ME"), ("", "")],
)
def test_login_rejected(service, username, password):
    with pytest.raises(AuthenticationError):
        service.authenticate(username, password)
