from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi_users import exceptions
from pydantic import BaseModel

from interview_prep.apis.deps import CurrentUser
from interview_prep.core.db.schemas.auth import User
from interview_prep.core.logging import get_logger
from interview_prep.core.uploads import image_store
from interview_prep.modules.auth import (
    fastapi_users,
    get_jwt_strategy,
    get_user_manager,
    UserRead,
    UserCreate,
    UserManager,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])

logger = get_logger(__name__)


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str
    user: UserRead


class ImageUploadResponse(BaseModel):
    imageUrl: str


async def authenticate_user(
    email: str, password: str, user_manager: UserManager
) -> User | None:
    """Authenticate user with email and password"""
    try:
        user = await user_manager.get_by_email(email)
    except exceptions.UserNotExists:
        # Hash anyway to keep timing similar for unknown emails
        user_manager.password_helper.hash(password)
        return None

    verified, updated_hash = user_manager.password_helper.verify_and_update(
        password, user.hashed_password
    )
    if not verified or not user.is_active:
        return None

    if updated_hash is not None:
        await user_manager.user_db.update(user, {"hashed_password": updated_hash})

    return user


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest, user_manager: UserManager = Depends(get_user_manager)
) -> LoginResponse:
    """Login endpoint that returns a bearer JWT and the user profile"""
    user = await authenticate_user(request.email, request.password, user_manager)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = await get_jwt_strategy().write_token(user)
    logger.info("User logged in", extra={"user_id": user.id})
    return LoginResponse(token=token, user=UserRead.model_validate(user))


@router.get("/profile", response_model=UserRead)
async def get_profile(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/upload-image", response_model=ImageUploadResponse)
async def upload_image(
    request: Request, image: Optional[UploadFile] = File(default=None)
) -> ImageUploadResponse:
    """Store a profile image and return its public URL"""
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if not image_store.is_allowed(image.content_type):
        raise HTTPException(
            status_code=400, detail="Only .jpeg, .jpg and .png formats are allowed"
        )

    path = image_store.save(image.filename, await image.read())
    return ImageUploadResponse(
        imageUrl=image_store.get_serving_url(path, str(request.base_url))
    )


# Registration from FastAPI Users: POST /api/auth/register
router.include_router(fastapi_users.get_register_router(UserRead, UserCreate))
