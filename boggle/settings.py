import os
from dataclasses import dataclass, field
from pathlib import Path

from boggle.grid import MAX_BOARD_SIZE


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    BOARD_SIZE: int = 4
    MIN_WORD_LENGTH: int = 4
    VISIT_DELAY_MS: int = 0

    NTFY_TOPIC: str = "boggle-game"
    NTFY_URL: str = "https://ntfy.sh"
    NOTIFY_ENABLED: bool = False
    NOTIFY_WORDS_PER_GROUP: int = 10

    MAX_SESSIONS: int = 100
    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))


def _coerce(current, value):
    """Convert `value` to the type of `current`."""
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("1", "true", "yes")
    if isinstance(current, int):
        return int(value)
    if isinstance(current, float):
        return float(value)
    if isinstance(current, Path):
        return Path(value)
    return str(value)


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "BOARD_SIZE": int,
    "MIN_WORD_LENGTH": int,
    "NOTIFY_ENABLED": bool,
    "NOTIFY_WORDS_PER_GROUP": int,
    "NTFY_TOPIC": str,
}

# (minimum, maximum); None means unbounded
_BOUNDS = {
    "BOARD_SIZE": (1, MAX_BOARD_SIZE),
    "MIN_WORD_LENGTH": (1, None),
    "NOTIFY_WORDS_PER_GROUP": (0, None),
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values to `cfg`. Returns {field: error} for the ones that failed."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        if name not in EDITABLE_FIELDS:
            if hasattr(cfg, name):
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            new_value = _coerce(getattr(cfg, name), value)
        except (TypeError, ValueError):
            errors[name] = f"expected {EDITABLE_FIELDS[name].__name__}, got {value!r}"
            continue
        minimum, maximum = _BOUNDS.get(name, (None, None))
        if minimum is not None and new_value < minimum:
            errors[name] = f"must be at least {minimum}"
            continue
        if maximum is not None and new_value > maximum:
            errors[name] = f"must be at most {maximum}"
            continue
        setattr(cfg, name, new_value)
    return errors


settings = Settings()
