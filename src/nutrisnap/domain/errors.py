"""Domain errors."""


class NutritionInputError(ValueError):
    """Raised when an input precondition of a nutrition computation fails."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
