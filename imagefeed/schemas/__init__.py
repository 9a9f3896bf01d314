"""Public schema exports."""

from .auth import (
    AuthStatus,
    AuthorizationURLResponse,
    LoginResult,
    OAuthTokenResponseBody,
)
from .events import (
    AvatarChanged,
    FeedChangeEvent,
    FeedCleared,
    PhotoReplaced,
    PhotosAppended,
    ProfileCleared,
    ProfileEvent,
    ProfileUpdated,
)
from .photos import (
    AppendedRange,
    FeedPage,
    FetchNextPageResult,
    PhotoRecord,
    PhotoResult,
    PhotoUrls,
)
from .profile import Profile, ProfileImage, ProfileResult, UserResult

__all__ = [
    "AppendedRange",
    "AuthStatus",
    "AuthorizationURLResponse",
    "AvatarChanged",
    "FeedChangeEvent",
    "FeedCleared",
    "FeedPage",
    "FetchNextPageResult",
    "LoginResult",
    "OAuthTokenResponseBody",
    "PhotoRecord",
    "PhotoReplaced",
    "PhotoResult",
    "PhotoUrls",
    "PhotosAppended",
    "Profile",
    "ProfileCleared",
    "ProfileEvent",
    "ProfileImage",
    "ProfileResult",
    "ProfileUpdated",
    "UserResult",
]
