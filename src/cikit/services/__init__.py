"""Service layer: one service per family of CI targets.

INVARIANT: every public service method returns a ServiceResult.
"""

from cikit.services.result import ServiceError, ServiceResult

__all__ = ["ServiceError", "ServiceResult"]
