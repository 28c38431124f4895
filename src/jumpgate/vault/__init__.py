"""
The Jumpgate vault and its access control.
"""

from .deployment import deploy_jumpgate
from .jumpgate import AMOUNT_TOO_SMALL, SEND_VALUE_FAILED, Jumpgate
from .ownable import NOT_OWNER, Ownable, only_owner

__all__ = [
    "Jumpgate",
    "Ownable",
    "only_owner",
    "deploy_jumpgate",
    "AMOUNT_TOO_SMALL",
    "NOT_OWNER",
    "SEND_VALUE_FAILED",
]
