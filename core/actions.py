# core/actions.py

"""
Action dispatch tables.

Rendered rows carry ActionLinks naming an action identifier and a target
id. The owner and tenant routers each own one ActionTable that maps those
identifiers to handler functions, so rendering never refers to handlers.
"""

from typing import Any, Callable, Dict, Iterable, Optional

from core.errors import UnknownActionError
from core.logging_config import logger
from models.actions import ActionLink, ActionRequest
from models.enums import BaseStrEnum, Role


class OwnerAction(BaseStrEnum):
    mark_rent_paid = "rent.mark_paid"
    set_maintenance_status = "maintenance.set_status"
    review_user_delete = "user.review_delete"
    delete_user = "user.delete"


class TenantAction(BaseStrEnum):
    pay_rent = "rent.pay"


Handler = Callable[[Any, ActionRequest], Any]


class ActionTable:
    """Maps action identifiers to handlers for one role."""

    def __init__(self, role: Role, handlers: Dict[str, Handler]):
        self.role = role
        self._handlers = {str(k): v for k, v in handlers.items()}

    def ids(self) -> list:
        return sorted(self._handlers)

    def dispatch(self, action_id: str, context: Any, request: ActionRequest) -> Any:
        handler = self._handlers.get(action_id)
        if handler is None:
            raise UnknownActionError(f"Unknown {self.role} action: {action_id}")

        logger.info(f"Dispatching {self.role} action {action_id} -> {request.target}")
        return handler(context, request)


def action_link(
    action: BaseStrEnum,
    target,
    label: str,
    *,
    options: Optional[Iterable[str]] = None,
    enabled: bool = True,
) -> ActionLink:
    return ActionLink(
        action=str(action),
        target=str(target),
        label=label,
        options=list(options) if options is not None else None,
        enabled=enabled,
    )
