"""Password credentials, stored apart from the user profile."""

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from geocidades.domain.auth.model.value import UserId
from geocidades.domain.shared.model.entity import Entity

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class Credentials(Entity):
    """Argon2 password hash for a user. Never leaves the server.

    ``password_hash`` is the full encoded hash (``$argon2id$...``), salt and
    cost parameters included.
    """

    user_id: UserId
    password_hash: str

    @classmethod
    def from_password(cls, user_id: UserId, password: str) -> "Credentials":
        return cls(user_id=user_id, password_hash=pwd_context.hash(password))

    def verify(self, password: str) -> bool:
        try:
            return pwd_context.verify(password, self.password_hash)
        except UnknownHashError:
            return False
