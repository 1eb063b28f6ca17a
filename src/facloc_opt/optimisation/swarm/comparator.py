"""Minimize/maximize fitness comparison."""

from ..errors import UnsupportedObjectiveTypeError
from ..problems.base import ObjectiveType


class Comparator:
    """
    Answers "is fitness ``a`` preferred over fitness ``b``" for the active direction.

    Every place that chooses a better fitness goes through a Comparator so the
    minimize/maximize policy lives in one spot.

    Example:
        ```python
        comparator = Comparator(ObjectiveType.MAXIMIZE)
        comparator.prefers(5.0, 3.0)  # True
        comparator(3.0, 3.0)          # False, equal values are never preferred
        ```
    """

    def __init__(self, obj_type: ObjectiveType | str | None = None):
        self.obj_type: ObjectiveType | None = None
        if obj_type is not None:
            self.set_type(obj_type)

    def set_type(self, obj_type: ObjectiveType | str) -> None:
        """Configure the objective direction; unknown tags raise UnsupportedObjectiveTypeError."""
        self.obj_type = ObjectiveType.parse(obj_type)

    def prefers(self, a: float, b: float) -> bool:
        if self.obj_type is ObjectiveType.MINIMIZE:
            return a < b
        if self.obj_type is ObjectiveType.MAXIMIZE:
            return a > b
        raise UnsupportedObjectiveTypeError(
            f"Comparator has no usable objective type (got {self.obj_type!r})"
        )

    __call__ = prefers

    def __repr__(self) -> str:
        direction = self.obj_type.value if self.obj_type else None
        return f"Comparator({direction!r})"
