from fastapi import APIRouter, Depends, HTTPException

from repairdesk.auth import get_current_user
from repairdesk.base.dependencies import get_service
from repairdesk.base.schemas import CamelModel
from repairdesk.errors import RegistrationError
from repairdesk.service import RepairDeskService
from repairdesk.user.models import User

router = APIRouter(prefix="/users")


class Credentials(CamelModel):
    email: str
    password: str


class PasswordReset(CamelModel):
    new_password: str


class UserResponse(CamelModel):
    model_config = {"from_attributes": True}

    email: str
    is_admin: bool


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    body: Credentials,
    service: RepairDeskService = Depends(get_service),
) -> User:
    try:
        return await service.register(body.email, body.password)
    except RegistrationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/login", response_model=UserResponse)
async def login(
    body: Credentials,
    service: RepairDeskService = Depends(get_service),
) -> User:
    user = service.authenticate(body.email, body.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials.")
    return user


@router.get("", response_model=list[UserResponse])
async def list_users(
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> list[User]:
    return service.list_users(user)


@router.put("/{email}/password", status_code=204)
async def reset_password(
    email: str,
    body: PasswordReset,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> None:
    await service.reset_password(user, email, body.new_password)
