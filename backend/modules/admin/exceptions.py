"""
Admin module exceptions.
"""

from shared.exceptions import NotFoundError


class PlanRecordNotFoundError(NotFoundError):
    """Raised when updating a plan that doesn't exist."""

    def __init__(self, plan_id: str):
        super().__init__(
            "Plano não encontrado",
            code="PLAN_NOT_FOUND",
            details={"plan_id": plan_id},
        )
