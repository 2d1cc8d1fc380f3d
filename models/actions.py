# models/actions.py

from typing import List, Optional
from pydantic import BaseModel


class ActionLink(BaseModel):
    """
    An action a rendered row offers. Clients post `{target, value}` to
    /<role>/actions/<action> instead of calling a handler by name.
    """
    action: str
    target: str
    label: str
    options: Optional[List[str]] = None
    enabled: bool = True


class ActionRequest(BaseModel):
    target: str
    value: Optional[str] = None
