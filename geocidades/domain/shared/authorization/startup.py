"""Startup validation for handler authorization declarations."""

import logging
from typing import get_args, get_origin

from geocidades.domain.shared.authorization.policy import Policy
from geocidades.domain.shared.command import CommandHandler
from geocidades.domain.shared.error import ConfigurationError
from geocidades.domain.shared.query import QueryHandler

logger = logging.getLogger(__name__)


def _get_command_or_query_type(handler_cls: type) -> type | None:
    """Extract the Command/Query type from a handler's generic bases."""
    for base in getattr(handler_cls, "__orig_bases__", []):
        origin = get_origin(base)
        if origin is None:
            continue
        name = getattr(origin, "__name__", "")
        if name in ("CommandHandler", "QueryHandler"):
            args = get_args(base)
            if args and isinstance(args[0], type):
                return args[0]
    return None


def check_handler_class(handler_cls: type) -> None:
    """Raise ConfigurationError if the handler lacks __auth__ and its DTO is not __public__."""
    dto_cls = _get_command_or_query_type(handler_cls)

    if dto_cls is not None and getattr(dto_cls, "__public__", False):
        return

    if not isinstance(getattr(handler_cls, "__auth__", None), Policy):
        raise ConfigurationError(
            f"Handler {handler_cls.__name__} has no __auth__ declaration "
            f"and its command/query is not __public__"
        )


def _all_subclasses(cls: type) -> list[type]:
    found = []
    for sub in cls.__subclasses__():
        found.append(sub)
        found.extend(_all_subclasses(sub))
    return found


def validate_all_handlers(package: str = "geocidades") -> None:
    """Scan the CommandHandler and QueryHandler subclasses defined under ``package``.

    Raises ConfigurationError listing all handlers missing __auth__ declarations.
    """
    violations: list[str] = []

    handlers = [*_all_subclasses(CommandHandler), *_all_subclasses(QueryHandler)]
    for handler_cls in handlers:
        module = handler_cls.__module__
        if module != package and not module.startswith(f"{package}."):
            continue
        try:
            check_handler_class(handler_cls)
        except ConfigurationError as e:
            violations.append(str(e))

    if violations:
        raise ConfigurationError(
            f"Authorization validation failed for {len(violations)} handler(s):\n"
            + "\n".join(f"  - {v}" for v in violations)
        )

    logger.info("Authorization startup validation passed for %d handler(s)", len(handlers))
