"""Auth domain commands."""

from .create_user import CreateUser, CreateUserHandler, CreateUserResult
from .delete_user import DeleteUser, DeleteUserHandler, DeleteUserResult
from .login import Login, LoginHandler, LoginResult
from .update_profile import UpdateProfile, UpdateProfileHandler, UpdateProfileResult
from .update_user import UpdateUser, UpdateUserHandler, UpdateUserResult

__all__ = [
    "CreateUser",
    "CreateUserHandler",
    "CreateUserResult",
    "DeleteUser",
    "DeleteUserHandler",
    "DeleteUserResult",
    "Login",
    "LoginHandler",
    "LoginResult",
    "UpdateProfile",
    "UpdateProfileHandler",
    "UpdateProfileResult",
    "UpdateUser",
    "UpdateUserHandler",
    "UpdateUserResult",
]
