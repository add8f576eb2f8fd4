"""Orientation models."""

from enum import IntEnum


class OrientationCode(IntEnum):
    """EXIF-style orientation codes (1-8)."""

    TOP_LEFT = 1
    TOP_RIGHT = 2
    BOTTOM_RIGHT = 3
    BOTTOM_LEFT = 4
    LEFT_TOP = 5
    RIGHT_TOP = 6
    RIGHT_BOTTOM = 7
    LEFT_BOTTOM = 8

    @property
    def label(self) -> str:
        """Return the EXIF label, e.g. 'RightTop'."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @property
    def is_identity(self) -> bool:
        return self is OrientationCode.TOP_LEFT

    @classmethod
    def from_value(cls, value: object) -> "OrientationCode | None":
        """Parse a raw tag value, returning None unless it is an integer in 1..8."""
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return None
        if not number.is_integer() or not 1 <= number <= 8:
            return None
        return cls(int(number))

    @classmethod
    def from_rotation(cls, degrees: object) -> "OrientationCode | None":
        """Map a stream rotation in degrees to an orientation code.

        Only multiples of 90 resolve; anything else returns None.
        """
        try:
            number = float(str(degrees).strip())
        except (TypeError, ValueError):
            return None
        if not number.is_integer():
            return None
        return _ROTATION_TO_CODE.get(int(number) % 360)


_ROTATION_TO_CODE = {
    0: OrientationCode.TOP_LEFT,
    90: OrientationCode.RIGHT_TOP,
    180: OrientationCode.BOTTOM_RIGHT,
    270: OrientationCode.LEFT_BOTTOM,
}
