"""Service layer exports."""

from .auth_session import AuthSession, AuthState
from .feed_store import FeedStore
from .like_coordinator import LikeCoordinator
from .login_flow import LoginFlow
from .logout import LogoutService
from .observers import Observable
from .profile_session import ProfileSession
from .tasks import LatestCallGuard

__all__ = [
    "AuthSession",
    "AuthState",
    "FeedStore",
    "LatestCallGuard",
    "LikeCoordinator",
    "LoginFlow",
    "LogoutService",
    "Observable",
    "ProfileSession",
]
