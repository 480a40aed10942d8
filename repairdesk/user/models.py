from __future__ import annotations

from repairdesk.base.schemas import CamelModel

BOOTSTRAP_ADMIN_EMAIL = "jeff@robomate.co.nz"
BOOTSTRAP_ADMIN_PASSWORD = "luba1234"
REGISTRATION_DOMAIN = "@robomate.co.nz"


class User(CamelModel):
    email: str
    # Stored and compared in plaintext, as the desk has always done.
    password: str
    is_admin: bool = False

    def matches_email(self, email: str) -> bool:
        return self.email.lower() == email.lower()


def ensure_bootstrap_admin(users: list[User]) -> tuple[list[User], bool]:
    """
    Make the bootstrap administrator the one and only admin.

    Returns the fixed-up list and whether anything changed.
    """
    changed = False
    result: list[User] = []
    for user in users:
        should_be_admin = user.matches_email(BOOTSTRAP_ADMIN_EMAIL)
        if user.is_admin != should_be_admin:
            user = user.model_copy(update={"is_admin": should_be_admin})
            changed = True
        result.append(user)

    if not any(u.matches_email(BOOTSTRAP_ADMIN_EMAIL) for u in result):
        result.append(
            User(
                email=BOOTSTRAP_ADMIN_EMAIL,
                password=BOOTSTRAP_ADMIN_PASSWORD,
                is_admin=True,
            )
        )
        changed = True
    return result, changed
