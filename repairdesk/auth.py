from fastapi import Depends, Header, HTTPException

from repairdesk.base.dependencies import get_service
from repairdesk.service import RepairDeskService
from repairdesk.user.models import User


def get_current_user(
    x_user: str = Header(),
    service: RepairDeskService = Depends(get_service),
) -> User:
    if ":" not in x_user:
        raise HTTPException(status_code=400, detail="X-User must be 'email:password'")

    email, password = x_user.split(":", maxsplit=1)
    if not email or not password:
        raise HTTPException(
            status_code=400, detail="X-User email and password must not be empty"
        )

    user = service.authenticate(email, password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials.")
    return user
