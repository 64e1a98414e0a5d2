"""Configuration for prnote.

Settings are resolved once at the entry point, in this order:
1. Module defaults below
2. Optional YAML file (.prnote/config.yaml or --config)
3. CLI options and environment variables

The result is a single Settings object that is passed to every stage.
Nothing below the CLI reads the environment directly.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator


class ConfigurationError(Exception):
    """Raised when a required input or credential is missing or invalid."""

    pass


class LLMProvider(Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class TicketPolicy(Enum):
    """What to do when the branch name carries no ticket id."""

    OMIT = "omit"
    SENTINEL = "sentinel"


class DiffFailurePolicy(Enum):
    """What to do when the unified diff cannot be fetched."""

    SKIP = "skip"
    ABORT = "abort"


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_PROVIDER = LLMProvider.OPENAI
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_DIFF_CHARS = 20000
DEFAULT_TICKET_PREFIXES = ["CDB", "DBP"]
DEFAULT_TICKET_SENTINEL = "CDB-0000"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CONFIG_FILE = Path(".prnote") / "config.yaml"

DEFAULT_MODELS = {
    LLMProvider.OPENAI: "gpt-4-turbo",
    LLMProvider.ANTHROPIC: "claude-sonnet-4-20250514",
}

# ============================================================
# CREDENTIAL ENVIRONMENT VARIABLES
# ============================================================
# Checked in order; the SECRET_ names are what older workflow files export.

API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: ("OPENAI_API_KEY", "SECRET_OPENAI_API_KEY"),
    LLMProvider.ANTHROPIC: ("ANTHROPIC_API_KEY", "SECRET_ANTHROPIC_API_KEY"),
}

GITHUB_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "SECRET_GITHUB_TOKEN", "MY_GITHUB_TOKEN")


# ============================================================
# CONFIG FILE SCHEMA
# ============================================================


class TicketFileConfig(BaseModel):
    """Ticket section of the config file."""

    prefixes: list[str] = DEFAULT_TICKET_PREFIXES.copy()
    base_url: Optional[str] = None
    policy: TicketPolicy = TicketPolicy.OMIT
    sentinel: str = DEFAULT_TICKET_SENTINEL

    @field_validator("prefixes")
    @classmethod
    def prefixes_must_be_alphanumeric(cls, v: list[str]) -> list[str]:
        """Ensure at least one prefix is given and each is a plain key."""
        cleaned = [p.strip() for p in v if p and p.strip()]
        if not cleaned:
            raise ValueError("ticket.prefixes cannot be empty")
        for prefix in cleaned:
            if not prefix.isalnum():
                raise ValueError(f"Invalid ticket prefix: {prefix!r}")
        return cleaned


class DiffFileConfig(BaseModel):
    """Diff section of the config file."""

    max_chars: int = DEFAULT_MAX_DIFF_CHARS
    on_failure: DiffFailurePolicy = DiffFailurePolicy.SKIP

    @field_validator("max_chars")
    @classmethod
    def max_chars_must_be_positive(cls, v: int) -> int:
        """Ensure the diff cap is a positive number."""
        if v <= 0:
            raise ValueError("diff.max_chars must be positive")
        return v


class FileConfig(BaseModel):
    """Pydantic model for .prnote/config.yaml."""

    provider: LLMProvider = DEFAULT_PROVIDER
    model: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    ticket: TicketFileConfig = TicketFileConfig()
    diff: DiffFileConfig = DiffFileConfig()
    use_marker: bool = False
    github_api_url: str = DEFAULT_GITHUB_API_URL
    timeout: float = DEFAULT_TIMEOUT


def load_config_file(path: Optional[Path]) -> FileConfig:
    """Load and validate the YAML config file.

    Args:
        path: Path to the config file. When None, the default location is
            used if it exists.

    Returns:
        A validated FileConfig. Defaults when no file is found.

    Raises:
        ConfigurationError: If the file is unreadable or fails validation.
    """
    if path is None:
        if not DEFAULT_CONFIG_FILE.exists():
            return FileConfig()
        path = DEFAULT_CONFIG_FILE
    elif not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load config from {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        return FileConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}:\n{e}")


# ============================================================
# RUNTIME SETTINGS
# ============================================================


@dataclass(frozen=True)
class TicketSettings:
    """Ticket resolution settings."""

    prefixes: tuple[str, ...] = tuple(DEFAULT_TICKET_PREFIXES)
    base_url: Optional[str] = None
    policy: TicketPolicy = TicketPolicy.OMIT
    sentinel: str = DEFAULT_TICKET_SENTINEL


@dataclass(frozen=True)
class DiffSettings:
    """Diff collection settings."""

    max_chars: int = DEFAULT_MAX_DIFF_CHARS
    on_failure: DiffFailurePolicy = DiffFailurePolicy.SKIP


@dataclass(frozen=True)
class Settings:
    """Everything one run needs, resolved once at startup."""

    owner: str
    repo: str
    pr_number: int
    branch_name: str
    github_token: str
    llm_api_key: str
    provider: LLMProvider = DEFAULT_PROVIDER
    model: str = DEFAULT_MODELS[DEFAULT_PROVIDER]
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    ticket: TicketSettings = field(default_factory=TicketSettings)
    diff: DiffSettings = field(default_factory=DiffSettings)
    use_marker: bool = False
    github_api_url: str = DEFAULT_GITHUB_API_URL
    timeout: float = DEFAULT_TIMEOUT


def resolve_credential(environ: Mapping[str, str], names: tuple[str, ...]) -> Optional[str]:
    """Return the first non-empty value among the given variable names."""
    for name in names:
        value = environ.get(name)
        if value and value.strip():
            return value.strip()
    return None


def build_settings(
    owner: Optional[str],
    repo: Optional[str],
    pr_number: Optional[str],
    branch_name: Optional[str],
    environ: Mapping[str, str],
    file_config: Optional[FileConfig] = None,
    provider: Optional[LLMProvider] = None,
    model: Optional[str] = None,
) -> Settings:
    """Validate inputs and build the Settings for one run.

    Args:
        owner: Repository owner.
        repo: Repository name.
        pr_number: Pull request number (as given on the command line).
        branch_name: Head branch of the pull request.
        environ: Environment mapping holding the credentials.
        file_config: Values loaded from the config file.
        provider: Provider override.
        model: Model override.

    Returns:
        The resolved Settings.

    Raises:
        ConfigurationError: If any input or credential is missing or invalid.
    """
    file_config = file_config or FileConfig()

    missing = [
        name
        for name, value in (
            ("owner", owner),
            ("repo", repo),
            ("pr_number", pr_number),
            ("branch_name", branch_name),
        )
        if not value or not str(value).strip()
    ]
    if missing:
        raise ConfigurationError(f"Missing required parameters: {', '.join(missing)}")

    try:
        number = int(str(pr_number).strip())
    except ValueError:
        raise ConfigurationError(f"Pull request number must be an integer, got {pr_number!r}")
    if number <= 0:
        raise ConfigurationError(f"Pull request number must be positive, got {number}")

    active_provider = provider or file_config.provider
    active_model = model or file_config.model or DEFAULT_MODELS[active_provider]

    key_vars = API_KEY_ENV_VARS[active_provider]
    llm_api_key = resolve_credential(environ, key_vars)
    github_token = resolve_credential(environ, GITHUB_TOKEN_ENV_VARS)

    missing_secrets = []
    if not llm_api_key:
        missing_secrets.append(key_vars[0])
    if not github_token:
        missing_secrets.append(GITHUB_TOKEN_ENV_VARS[0])
    if missing_secrets:
        raise ConfigurationError(f"Missing required secrets: {' or '.join(missing_secrets)}")

    return Settings(
        owner=owner.strip(),
        repo=repo.strip(),
        pr_number=number,
        branch_name=branch_name.strip(),
        github_token=github_token,
        llm_api_key=llm_api_key,
        provider=active_provider,
        model=active_model,
        max_tokens=file_config.max_tokens,
        temperature=file_config.temperature,
        ticket=TicketSettings(
            prefixes=tuple(file_config.ticket.prefixes),
            base_url=file_config.ticket.base_url,
            policy=file_config.ticket.policy,
            sentinel=file_config.ticket.sentinel,
        ),
        diff=DiffSettings(
            max_chars=file_config.diff.max_chars,
            on_failure=file_config.diff.on_failure,
        ),
        use_marker=file_config.use_marker,
        github_api_url=file_config.github_api_url,
        timeout=file_config.timeout,
    )
