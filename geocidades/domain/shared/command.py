"""Command and CommandHandler base classes with authorization gate."""

import logging
from abc import ABCMeta, abstractmethod
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from functools import wraps
from typing import Any, ClassVar, Generic, TypeVar, dataclass_transform

from pydantic import BaseModel

logger = logging.getLogger("geocidades.authz")


class Command(BaseModel):
    __public__: ClassVar[bool] = False


class Result(BaseModel): ...


C = TypeVar("C", bound=Command)
R = TypeVar("R", bound=Result)

# Unbound async handler method: (self, cmd) -> Coroutine -> Result
_HandlerMethod = Callable[..., Coroutine[Any, Any, Any]]


def check_handler_auth(handler: Any, dto: Any) -> None:
    """Evaluate a handler's ``__auth__`` policy against its ``principal``.

    Shared by command and query handlers. Public DTOs skip the check.
    """
    from geocidades.domain.auth.model.principal import Principal
    from geocidades.domain.shared.authorization.policy import Policy
    from geocidades.domain.shared.error import AuthorizationError, ConfigurationError

    if getattr(type(dto), "__public__", False):
        return

    auth_policy = getattr(type(handler), "__auth__", None)
    if not isinstance(auth_policy, Policy):
        raise ConfigurationError(
            f"Handler {type(handler).__name__} has no __auth__ declaration "
            f"and its command/query is not __public__"
        )

    principal = getattr(handler, "principal", None)
    if not isinstance(principal, Principal):
        raise AuthorizationError("Authentication required", code="missing_token")

    logger.debug(
        "Auth check: handler=%s, policy=%s, role=%s, user_id=%s",
        type(handler).__name__,
        auth_policy,
        principal.role,
        principal.user_id,
    )

    if not auth_policy.evaluate(principal):
        logger.warning(
            "Handler gate denied: handler=%s, role=%s, user_id=%s",
            type(handler).__name__,
            principal.role,
            principal.user_id,
        )
        raise AuthorizationError(
            f"Access denied: insufficient role for {type(handler).__name__}",
            code="access_denied",
        )


def wrap_run_with_auth(original_run: _HandlerMethod) -> _HandlerMethod:
    """Wrap the run() method with __auth__ policy evaluation."""

    @wraps(original_run)
    async def auth_wrapped_run(self: Any, cmd: Any) -> Any:
        check_handler_auth(self, cmd)
        return await original_run(self, cmd)

    return auth_wrapped_run


@dataclass_transform()
class _CommandHandlerMeta(ABCMeta):
    """Metaclass that combines ABC with auto-dataclass and __auth__ gate for subclasses."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)

            original_run = cls.__dict__.get("run")
            if original_run is not None:
                cls.run = wrap_run_with_auth(original_run)

        return cls


class CommandHandler(Generic[C, R], metaclass=_CommandHandlerMeta):
    """Base class for command handlers. Subclasses are automatically dataclasses.

    Declare __auth__ to enforce role-based access:
        class MyHandler(CommandHandler[MyCmd, MyResult]):
            __auth__ = requires_role(Role.ADMINISTRATOR)
            principal: Principal
    """

    @abstractmethod
    async def run(self, cmd: C) -> R: ...
