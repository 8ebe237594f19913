"""Exceptions raised by the seam carving engine.

Both failures are raised before any state is touched, so a removal either
completes fully or leaves the image, energy matrix and path cache as they were.
"""

from typing import Optional


class SeamCarvingError(ValueError):
    """Base exception for seam carving failures."""

    def __init__(self, message: str, direction: Optional[str] = None):
        """
        Args:
            message: Human-readable error description
            direction: 'vertical' or 'horizontal', if the error concerns a seam
        """
        self.message = message
        self.direction = direction
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.direction:
            return f"{self.message} (direction={self.direction})"
        return self.message


class InvalidSeam(SeamCarvingError):
    """Raised when a seam does not fit the current image.

    This happens when:
    - the seam length differs from the image height (vertical) or width (horizontal)
    - an index lies outside the current image
    - two consecutive indices differ by more than one
    """

    def __init__(self, message: str, direction: Optional[str] = None,
                 position: Optional[int] = None):
        self.position = position
        super().__init__(message, direction)

    def _format_message(self) -> str:
        parts = [self.message]
        if self.direction:
            parts.append(f"direction={self.direction}")
        if self.position is not None:
            parts.append(f"position={self.position}")
        if len(parts) == 1:
            return parts[0]
        return f"{parts[0]} ({', '.join(parts[1:])})"


class DegenerateImage(SeamCarvingError):
    """Raised when an image has, or would end up with, a zero-sized dimension."""
    pass
