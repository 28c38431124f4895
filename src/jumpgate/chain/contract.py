"""
Contract base class for the Jumpgate execution environment.

Contracts are plain Python classes. Entry points that change state are
marked with ``@external``; everything else is a view and can be read at any
time. The chain executes external calls as transactions (when called from
outside) or as nested message calls (when one contract calls another).
"""

import copy
import functools
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Type

from ..errors import ContractRevert
from .types import TransactionReceipt

if TYPE_CHECKING:
    from .chain import Chain


def external(func: Optional[Callable] = None, *, payable: bool = False):
    """Mark a contract method as a state-changing entry point.

    From outside a transaction the wrapped method takes ``sender=`` (and
    ``value=`` when payable) and returns a ``TransactionReceipt``. From inside
    another contract it returns the method's own return value and the calling
    contract becomes ``msg_sender``.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(self, *args, sender: Any = None, value: int = 0, **kwargs):
            return self.chain.dispatch(
                self, fn, args, kwargs, sender=sender, value=value, payable=payable
            )

        wrapper.is_external = True
        wrapper.payable = payable
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


def require(
    condition: Any, reason: str = "", error: Type[ContractRevert] = ContractRevert
) -> None:
    """Revert the current call with ``reason`` unless ``condition`` holds."""
    if not condition:
        raise error(reason)


class Contract:
    """Base class for contracts deployed on a ``Chain``.

    Every instance attribute except the ones listed in ``_transient`` is
    contract storage: it is captured before each transaction and restored if
    the transaction reverts.
    """

    _transient = ("chain", "address", "tx")

    # Whether value may be sent along with deployment
    payable_constructor = False

    def __init__(self, chain: "Chain", address: str):
        self.chain = chain
        self.address = address
        self.tx: Optional[TransactionReceipt] = None

    @classmethod
    def deploy(cls, chain: "Chain", *args, sender: Any = None, value: int = 0, **kwargs):
        """Deploy a new instance; the deployment receipt is stored on ``.tx``."""
        return chain.deploy(cls, args, kwargs, sender=sender, value=value)

    @property
    def msg_sender(self) -> str:
        """Immediate caller of the executing entry point."""
        return self.chain.context.caller

    @property
    def msg_value(self) -> int:
        """Native value sent with the executing entry point."""
        return self.chain.context.value

    def emit(self, name: str, **args) -> None:
        """Emit an event from this contract."""
        self.chain.emit(self.address, name, args)

    def balance(self) -> int:
        """Native-currency balance."""
        return self.chain.get_balance(self.address)

    def export_state(self) -> Dict[str, Any]:
        """Deep copy of contract storage."""
        return copy.deepcopy(
            {
                key: value
                for key, value in vars(self).items()
                if key not in self._transient
            }
        )

    def restore_state(self, state: Dict[str, Any]) -> None:
        """Replace contract storage with a previously exported copy."""
        for key in [key for key in vars(self) if key not in self._transient]:
            delattr(self, key)
        for key, value in copy.deepcopy(state).items():
            setattr(self, key, value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return other.lower() == self.address.lower()
        if hasattr(other, "address"):
            return other.address == self.address
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.address)

    def __str__(self) -> str:
        return self.address

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.address}'>"
