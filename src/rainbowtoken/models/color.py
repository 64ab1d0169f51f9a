"""Color model and color arithmetic for the game."""

from pydantic import BaseModel, ConfigDict, Field

from rainbowtoken.exceptions import InvalidTargetColor

# Channel values a freshly joined player can be assigned
PRIMARY_CHANNEL_VALUES = (0, 255)

# Distance a target channel must keep from 0 and 255
DEFAULT_TARGET_MARGIN = 10


class Color(BaseModel):
    """Standard 8-bit RGB color.

    The model is frozen: colors are values, and a player's color changes by
    being replaced, never mutated.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def black(cls) -> "Color":
        """Create black, the zero color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def white(cls) -> "Color":
        """Create white."""
        return cls(r=255, g=255, b=255)

    @classmethod
    def from_rgb_tuple(cls, rgb: tuple[int, int, int]) -> "Color":
        """Create a color from an (r, g, b) tuple."""
        r, g, b = rgb
        return cls(r=r, g=g, b=b)

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to hex color string.

        Example:
            >>> Color(r=255, g=0, b=127).to_hex()
            '#FF007F'
        """
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def is_primary(self) -> bool:
        """True when every channel is exactly 0 or 255."""
        return all(c in PRIMARY_CHANNEL_VALUES for c in self.to_rgb_tuple())

    def blend(self, other: "Color") -> "Color":
        """Floor-average this color with another, channel by channel.

        Example:
            >>> Color.white().blend(Color.black()).to_rgb_tuple()
            (127, 127, 127)
        """
        return Color(
            r=(self.r + other.r) // 2,
            g=(self.g + other.g) // 2,
            b=(self.b + other.b) // 2,
        )

    def __str__(self) -> str:
        return f"({self.r}, {self.g}, {self.b})"


def is_valid_target_channel(value: int, margin: int = DEFAULT_TARGET_MARGIN) -> bool:
    """Check that a target channel is in range and at least `margin` away from 0 and 255."""
    return 0 <= value <= 255 and margin <= value <= 255 - margin


def validate_target_color(
    r: int, g: int, b: int, margin: int = DEFAULT_TARGET_MARGIN
) -> Color:
    """
    Build the target color, rejecting channels too close to the extremes.

    Args:
        r: Red channel
        g: Green channel
        b: Blue channel
        margin: Minimum distance from 0 and 255 for every channel

    Returns:
        The validated target color

    Raises:
        InvalidTargetColor: If any channel is out of range or within the margin
    """
    if not all(is_valid_target_channel(c, margin) for c in (r, g, b)):
        raise InvalidTargetColor(r, g, b)
    return Color(r=r, g=g, b=b)
