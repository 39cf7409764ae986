"""Auth domain queries."""

from .get_menu import GetMenu, GetMenuHandler, GetMenuResult
from .get_user import GetCurrentUser, GetCurrentUserHandler, GetUser, GetUserHandler, UserResult
from .list_users import ListUsers, ListUsersHandler, ListUsersResult
from .user_view import UserView

__all__ = [
    "GetCurrentUser",
    "GetCurrentUserHandler",
    "GetMenu",
    "GetMenuHandler",
    "GetMenuResult",
    "GetUser",
    "GetUserHandler",
    "ListUsers",
    "ListUsersHandler",
    "ListUsersResult",
    "UserResult",
    "UserView",
]
