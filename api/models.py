"""
API request and response models for Campus Accounts REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py, which
own the internal domain representation. Route handlers map between the two.

Request bodies use the camelCase keys the mobile client sends (firstName,
activeTab, mbtiType); populate_by_name lets tests and Python callers use the
snake_case names as well.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from accounts.profile import ProfileView
from accounts.registration import RegistrationForm

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /register.

    Every field is optional at the schema level so that missing values reach
    the registration checks and produce their specific messages instead of a
    generic schema error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    password: Optional[str] = None
    id_number: Optional[str] = Field(default=None, alias="idNumber")
    birthday: Optional[str] = None
    program: Optional[str] = None
    department: Optional[str] = None
    active_tab: Optional[str] = Field(default=None, alias="activeTab")
    username: Optional[str] = None

    def to_form(self) -> RegistrationForm:
        return RegistrationForm(**self.model_dump(by_alias=False))


class LoginRequest(BaseModel):
    """Request body for POST /login."""

    model_config = ConfigDict(extra="ignore")

    username: str = ""
    password: str = Field(default="", max_length=255)


class MbtiUpdateRequest(BaseModel):
    """Request body for POST /update-mbti. The value is stored unvalidated."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    mbti_type: Optional[str] = Field(default=None, alias="mbtiType")


class InterestsUpdateRequest(BaseModel):
    """Request body for POST /update-interests.

    No max_length here: the six-item limit is a domain rule enforced by
    accounts.profile.update_interests with its own client message.
    """

    model_config = ConfigDict(extra="ignore")

    interests: list[str]


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class DataResponse(BaseModel):
    """Envelope used by most endpoints: {"status": ..., "data": ...}."""

    status: str = "ok"
    data: Any = None


class MessageResponse(BaseModel):
    """Envelope used by POST /register: {"status": ..., "message": ...}."""

    status: str = "ok"
    message: str


class ProfileData(BaseModel):
    """Profile payload. Fields that the record does not store are null."""

    username: Optional[str]
    fullname: Optional[str] = None
    bio: Optional[str] = None
    address: Optional[str] = None
    pronouns: Optional[str] = None

    @classmethod
    def from_view(cls, view: ProfileView) -> "ProfileData":
        return cls(
            username=view.username,
            fullname=view.fullname,
            bio=view.bio,
            address=view.address,
            pronouns=view.pronouns,
        )


class ProfileResponse(BaseModel):
    status: str = "ok"
    data: ProfileData


class HealthResponse(BaseModel):
    """Liveness payload for GET /health."""

    status: str = "healthy"
    version: str
    components: dict[str, str]
