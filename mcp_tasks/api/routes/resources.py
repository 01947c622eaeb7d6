"""
Resources Router - Static MCP Resources
"""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(prefix="/resources", tags=["MCP"])


class UserProfile(BaseModel):
    """The user-profile resource advertised in the manifest."""

    id: str
    name: str
    role: str


USER_PROFILE = UserProfile(id="user-001", name="Roland", role="AI Engineer")


@router.get("/user-profile", response_model=UserProfile)
async def get_user_profile() -> UserProfile:
    return USER_PROFILE
