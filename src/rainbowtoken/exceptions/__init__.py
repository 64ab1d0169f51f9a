"""
Custom exception hierarchy for RainbowToken.

## Exception Hierarchy

```
RainbowTokenError (base)
├── GameError                       (ledger rejections, expose `.signature`)
│   ├── InvalidTargetColor
│   ├── SenderNotAPlayer
│   ├── BlendingAccountNotAPlayer
│   ├── SenderAlreadyPlayer
│   ├── InsufficientValue
│   ├── InvalidZeroBlendingPrice
│   ├── ColorNotMatching
│   ├── PlayerNotWinner
│   └── GameIsOver
├── LedgerInvariantError
├── ColorSourceExhaustedError
└── ConfigurationError
    ├── ConfigFileInvalidError
    ├── ConfigValidationError
    ├── GameNotDeployedError
    └── GameAlreadyDeployedError
```

## Usage

A rejected transaction never changes ledger state. Match on the type, or on
the exact `signature` when the parameters matter:

```python
from rainbowtoken.exceptions import ColorNotMatching

try:
    ledger.blend("alice", "bob", expected_color, value=price)
except ColorNotMatching as e:
    print(e.signature)  # ColorNotMatching([128, 0, 0], [255, 0, 0])
    retry_with(e.actual)
```
"""

from .base import RainbowTokenError
from .config import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    GameAlreadyDeployedError,
    GameNotDeployedError,
)
from .game import (
    BlendingAccountNotAPlayer,
    ColorNotMatching,
    ColorSourceExhaustedError,
    GameError,
    GameIsOver,
    InsufficientValue,
    InvalidTargetColor,
    InvalidZeroBlendingPrice,
    LedgerInvariantError,
    PlayerNotWinner,
    SenderAlreadyPlayer,
    SenderNotAPlayer,
)
from .handlers import ErrorContext, format_error_for_display, wrap_pydantic_error

__all__ = [
    # Base
    "RainbowTokenError",
    # Game
    "BlendingAccountNotAPlayer",
    "ColorNotMatching",
    "ColorSourceExhaustedError",
    "GameError",
    "GameIsOver",
    "InsufficientValue",
    "InvalidTargetColor",
    "InvalidZeroBlendingPrice",
    "LedgerInvariantError",
    "PlayerNotWinner",
    "SenderAlreadyPlayer",
    "SenderNotAPlayer",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "GameAlreadyDeployedError",
    "GameNotDeployedError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_pydantic_error",
]
