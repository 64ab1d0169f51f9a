"""Game configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from rainbowtoken.model_manager.persistence import PydanticPersistence

from .color import DEFAULT_TARGET_MARGIN

WEI_PER_ETHER = 10**18

DEFAULT_CONFIG_DIR = Path.home() / ".rainbowtoken"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


class GameConfig(BaseModel):
    """Parameters used when deploying a new game, and where to keep it."""

    entry_fee: int = Field(
        default=WEI_PER_ETHER // 10,
        gt=0,
        description="Fee to join a game, in wei (also the initial blending price)",
    )
    self_blend_price: int = Field(
        default=WEI_PER_ETHER // 2,
        gt=0,
        description="Fee to blend with one's own original color, in wei",
    )
    target_margin: int = Field(
        default=DEFAULT_TARGET_MARGIN,
        ge=0,
        le=127,
        description="Minimum distance of every target channel from 0 and 255",
    )
    state_file: Path = Field(
        default_factory=lambda: DEFAULT_CONFIG_DIR / "game.json",
        description="File holding the deployed game",
    )

    @field_serializer("state_file")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "GameConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.rainbowtoken/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
