"""Infrastructure modules for the Entra group members report.

- operations: Operation results and HTTP error classification
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
