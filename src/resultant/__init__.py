"""resultant: explicit, typed success/failure values.

- Result/Success/Failure: closed two-variant outcome type with combinators
- success/failure: constructors typed as Result
- from_nullable/partition: bridges to optional values and batches
- ContractViolation: raised on wrong-variant access and other misuse

Example:
    >>> from resultant import Result, failure, success
    >>>
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     return failure("division by zero") if b == 0 else success(a / b)
    >>>
    >>> divide(10, 2).map(lambda x: x * 2).flat_map(lambda x: success(x + 1)).success
    11.0
"""

from .config import ResultantSettings, clear_settings_cache, get_settings
from .errors import ContractViolation, Violation, ViolationCode
from .observability import configure_from_settings, configure_logging, get_logger
from .result import (
    Failure,
    Partition,
    Result,
    Success,
    failure,
    from_nullable,
    partition,
    success,
)

__version__ = "0.3.0"

__all__ = [
    # Core types
    "Result",
    "Success",
    "Failure",
    "Partition",
    # Constructors & helpers
    "success",
    "failure",
    "from_nullable",
    "partition",
    # Contract violations
    "ContractViolation",
    "Violation",
    "ViolationCode",
    # Configuration & logging
    "ResultantSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
]
