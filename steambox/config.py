import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

# -------- Update targets
UPDATE_GIST              = "GIST"
UPDATE_MARKDOWN          = "MARKDOWN"
UPDATE_GIST_AND_MARKDOWN = "GIST_AND_MARKDOWN"
UPDATE_OPTIONS           = (UPDATE_GIST, UPDATE_MARKDOWN, UPDATE_GIST_AND_MARKDOWN)

# -------- Defaults
DEFAULT_TITLE        = "🎮 Recently played Steam games"
DEFAULT_MAX_LINES    = 3
DEFAULT_RECENT_COUNT = 5

# -------- Networking knobs
USER_AGENT   = "SteamBoxBot/1.0 (+github actions)"
HTTP_TIMEOUT = float(os.getenv("STEAMBOX_HTTP_TIMEOUT", "20"))
HTTP_RETRIES = int(os.getenv("STEAMBOX_HTTP_RETRIES", "3"))     # retries after the first attempt
HTTP_PAUSE   = float(os.getenv("STEAMBOX_HTTP_PAUSE", "0"))     # delay after a successful call


class ConfigError(RuntimeError):
    """Raised when required environment values are missing or invalid."""


@dataclass(frozen=True)
class Settings:
    steam_api_key: str
    steam_id: str
    gist_id: Optional[str] = None
    gh_token: Optional[str] = None
    gh_user: Optional[str] = None
    gist_filename: Optional[str] = None
    update_option: str = UPDATE_GIST
    markdown_file: Optional[Path] = None
    title: str = DEFAULT_TITLE
    max_lines: int = DEFAULT_MAX_LINES
    recent_count: int = DEFAULT_RECENT_COUNT
    dry_run: bool = False

    @property
    def targets(self) -> Tuple[str, ...]:
        if self.update_option == UPDATE_GIST_AND_MARKDOWN:
            return (UPDATE_GIST, UPDATE_MARKDOWN)
        return (self.update_option,)


# -------- Env parsing helpers
def _flag(val: Optional[str], default: bool = False) -> bool:
    val = (val or "").strip().lower()
    if val in {"0", "false", "no", "off"}: return False
    if val in {"1", "true", "yes", "on"}:  return True
    return default

def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value

def _str(env: Mapping[str, str], name: str) -> Optional[str]:
    val = (env.get(name) or "").strip()
    return val or None


def load_settings(env: Mapping[str, str] = os.environ, **overrides) -> Settings:
    """
    Build Settings from environment variables; keyword overrides (from CLI flags)
    win over the environment when they are not None.

    Raises ConfigError listing every missing variable for the selected targets.
    """
    update_option = (overrides.get("update_option") or env.get("UPDATE_OPTION") or UPDATE_GIST).strip().upper()
    if update_option not in UPDATE_OPTIONS:
        raise ConfigError(
            f"UPDATE_OPTION must be one of {', '.join(UPDATE_OPTIONS)}, got {update_option!r}"
        )

    markdown_file = overrides.get("markdown_file") or _str(env, "MARKDOWN_FILE")
    max_lines = overrides.get("max_lines")
    dry_run = overrides.get("dry_run")

    required = ["STEAM_API_KEY", "STEAM_ID"]
    if update_option in (UPDATE_GIST, UPDATE_GIST_AND_MARKDOWN):
        required += ["GIST_ID", "GH_TOKEN"]
    missing = [name for name in required if not _str(env, name)]
    if update_option in (UPDATE_MARKDOWN, UPDATE_GIST_AND_MARKDOWN) and not markdown_file:
        missing.append("MARKDOWN_FILE")
    if missing:
        raise ConfigError(f"Missing environment variables: {', '.join(missing)}")

    return Settings(
        steam_api_key = _str(env, "STEAM_API_KEY"),
        steam_id      = _str(env, "STEAM_ID"),
        gist_id       = _str(env, "GIST_ID"),
        gh_token      = _str(env, "GH_TOKEN"),
        gh_user       = _str(env, "GH_USER"),
        gist_filename = _str(env, "GIST_FILENAME"),
        update_option = update_option,
        markdown_file = Path(markdown_file) if markdown_file else None,
        title         = _str(env, "STEAMBOX_TITLE") or DEFAULT_TITLE,
        max_lines     = max_lines if max_lines is not None else _int(env, "STEAMBOX_MAX_LINES", DEFAULT_MAX_LINES),
        recent_count  = _int(env, "STEAMBOX_RECENT_COUNT", DEFAULT_RECENT_COUNT),
        dry_run       = bool(dry_run) or _flag(env.get("STEAMBOX_DRY_RUN")),
    )
