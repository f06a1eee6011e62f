from typing import Dict, Optional, Any


class SettlementError(Exception):
    """Base class for errors raised by the settlement engine"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
        }


class InvalidInputError(SettlementError):
    """
    Malformed or inconsistent input: empty or undersized roster, unknown
    member, non-positive amount, empty participant set.

    `index` is the position of the offending expense (or roster entry) and
    `field` names the offending attribute, when they apply.
    """

    def __init__(self, message: str, index: Optional[int] = None, field: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["index"] = self.index
        data["field"] = self.field
        return data


class UnbalancedLedgerError(SettlementError):
    """Balances do not net to zero, or matching failed to close every balance"""

    def __init__(self, message: str, residuals: Optional[Dict[str, int]] = None):
        super().__init__(message)
        self.residuals = dict(residuals or {})

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["index"] = None
        data["field"] = None
        return data
