"""Room validators that turn ratio counts into warnings and blocking issues."""

from abc import ABC, abstractmethod

from .types import CheckSeverity, RatioStatus, RoomCheckContext


class BaseValidator(ABC):
    """Base class for room compliance validators."""

    @abstractmethod
    def validate(self, context: RoomCheckContext, status: RatioStatus) -> None:
        """Validate compliance and record issues on the status."""
        pass


class RatioHeadcountValidator(BaseValidator):
    """Educator headcount against the regulatory ratio. Always blocking."""

    def validate(self, context: RoomCheckContext, status: RatioStatus) -> None:
        if status.is_compliant:
            return

        status.add_issue(
            f"Ratio breach: {status.scheduled_educators}/{status.required_educators} educators "
            f"for {status.booked_children} children (1:{context.ratio:g} required)",
            CheckSeverity.BLOCKING,
        )


class QualificationMixValidator(BaseValidator):
    """Qualified educator share. Severity comes from the ratio policy."""

    def validate(self, context: RoomCheckContext, status: RatioStatus) -> None:
        if status.is_qualification_compliant:
            return

        status.add_issue(
            f"Qualification gap: {status.qualified_educators}/{status.required_qualified_educators} "
            "qualified educators required",
            context.policy.qualification_shortfall_severity,
        )


class RoomCapacityValidator(BaseValidator):
    """Booked children against licensed room capacity. Always blocking."""

    def validate(self, context: RoomCheckContext, status: RatioStatus) -> None:
        if context.booked_children <= context.room_capacity:
            return

        status.add_issue(
            f"Room capacity exceeded: {context.booked_children}/{context.room_capacity} children",
            CheckSeverity.BLOCKING,
        )


DEFAULT_ROOM_VALIDATORS: tuple[BaseValidator, ...] = (
    RatioHeadcountValidator(),
    QualificationMixValidator(),
    RoomCapacityValidator(),
)
