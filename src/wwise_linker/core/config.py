"""
Configuration management for Wwise Linker
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class WaapiConfig:
    """Configuration for the WAAPI (Wwise Authoring API) connection."""

    host: str = "127.0.0.1"
    port: int = 8090  # WAAPI HTTP server port (Wwise > User Preferences)
    timeout_seconds: float = 10.0

    def validate(self) -> None:
        """Validate WAAPI configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if not is_valid_port(self.port):
            raise ValueError(f"Invalid WAAPI port: {self.port} (expected 1-65535)")
        if self.timeout_seconds <= 0:
            raise ValueError("WAAPI timeout must be positive")


@dataclass
class ImportConfig:
    """Configuration for importing Wwise sources into the timeline."""

    staging_subdir: str = "Media"  # Relative to the REAPER project directory
    gap_seconds: float = 0.1  # Spacing between imported items
    track_name_template: str = "Wwise Import #{n}"


@dataclass
class RenderConfig:
    """Configuration for rendering items back over the Wwise originals."""

    render_pattern: str = "$item"
    render_settings: int = 32  # Render source: selected media items
    render_command_id: int = 42230  # Render project using most recent settings, auto-close


@dataclass
class PerforceConfig:
    """Configuration for Perforce checkout before render."""

    enabled: bool = True
    executable: str = "p4"
    port: Optional[str] = None
    user: Optional[str] = None
    client: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/wwise-linker/wwise-linker.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class UIConfig:
    """Configuration for the presentation layer."""

    log_max_lines: int = 500


@dataclass
class Config:
    """Main configuration object."""

    waapi: WaapiConfig = field(default_factory=WaapiConfig)
    import_: ImportConfig = field(default_factory=ImportConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    perforce: PerforceConfig = field(default_factory=PerforceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def is_valid_port(port: object) -> bool:
    """Check that a value is a usable TCP port number."""
    return isinstance(port, int) and not isinstance(port, bool) and 0 < port < 65536


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "wwise-linker"
    return Path.home() / ".config" / "wwise-linker"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    try:
        current = Path(__file__).resolve().parent
        for parent in [current] + list(current.parents):
            if (parent / "pyproject.toml").exists():
                config_path = parent / "config.toml"
                if config_path.exists():
                    return config_path
                return None
    except OSError:
        pass
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/wwise-linker (or ~/.config/wwise-linker)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "wwise-linker"
    return Path.home() / ".local" / "share" / "wwise-linker"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Wwise Linker Configuration

[waapi]
# Address of the Wwise authoring application
host = "127.0.0.1"

# WAAPI HTTP port (Wwise: Project > User Preferences > Enable Wwise Authoring API)
port = 8090

# Seconds to wait for a WAAPI reply
timeout_seconds = 10.0

[import]
# Folder (relative to the REAPER project) receiving local working copies
staging_subdir = "Media"

# Gap in seconds between imported items
gap_seconds = 0.1

# Name of the track created for each import ({n} is the import counter)
track_name_template = "Wwise Import #{n}"

[render]
# REAPER render file name pattern
render_pattern = "$item"

# REAPER render source flags (32 = selected media items)
render_settings = 32

# REAPER action used to render (42230 = render using most recent settings, auto-close)
render_command_id = 42230

[perforce]
# Check files out of Perforce before overwriting them
enabled = true

# p4 command line executable
executable = "p4"

# Optional connection overrides (also read from P4PORT/P4USER/P4CLIENT)
# port = "ssl:perforce:1666"
# user = "sound.designer"
# client = "sound_designer_ws"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/wwise-linker/wwise-linker.log)
# log_file = "/path/to/custom/wwise-linker.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false

[ui]
# Number of log lines kept for display
log_max_lines = 500
""".strip()


def _parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML data, keeping defaults for missing keys."""
    config = Config()

    if "waapi" in toml_data:
        waapi_data = toml_data["waapi"]
        config.waapi = WaapiConfig(
            host=waapi_data.get("host", config.waapi.host),
            port=waapi_data.get("port", config.waapi.port),
            timeout_seconds=float(
                waapi_data.get("timeout_seconds", config.waapi.timeout_seconds)
            ),
        )
        try:
            config.waapi.validate()
        except ValueError as e:
            print(f"Warning: Invalid WAAPI configuration: {e}")
            print("Using default WAAPI configuration.")
            config.waapi = WaapiConfig()

    if "import" in toml_data:
        import_data = toml_data["import"]
        config.import_ = ImportConfig(
            staging_subdir=import_data.get(
                "staging_subdir", config.import_.staging_subdir
            ),
            gap_seconds=float(
                import_data.get("gap_seconds", config.import_.gap_seconds)
            ),
            track_name_template=import_data.get(
                "track_name_template", config.import_.track_name_template
            ),
        )

    if "render" in toml_data:
        render_data = toml_data["render"]
        config.render = RenderConfig(
            render_pattern=render_data.get(
                "render_pattern", config.render.render_pattern
            ),
            render_settings=render_data.get(
                "render_settings", config.render.render_settings
            ),
            render_command_id=render_data.get(
                "render_command_id", config.render.render_command_id
            ),
        )

    if "perforce" in toml_data:
        perforce_data = toml_data["perforce"]
        config.perforce = PerforceConfig(
            enabled=perforce_data.get("enabled", config.perforce.enabled),
            executable=perforce_data.get("executable", config.perforce.executable),
            port=perforce_data.get("port"),
            user=perforce_data.get("user"),
            client=perforce_data.get("client"),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get("backup_count", config.logging.backup_count),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    if "ui" in toml_data:
        ui_data = toml_data["ui"]
        config.ui = UIConfig(
            log_max_lines=ui_data.get("log_max_lines", config.ui.log_max_lines),
        )

    return config


def apply_env_overrides(config: Config) -> Config:
    """Override configuration values with environment variables.

    Recognised variables:
    - WAAPI_HOST, WAAPI_PORT
    - P4PORT, P4USER, P4CLIENT
    """
    waapi_host = os.environ.get("WAAPI_HOST")
    waapi_port = os.environ.get("WAAPI_PORT")

    if waapi_host:
        config.waapi.host = waapi_host
    if waapi_port:
        try:
            port = int(waapi_port)
        except ValueError:
            port = -1
        if is_valid_port(port):
            config.waapi.port = port
        else:
            print(f"Warning: Ignoring invalid WAAPI_PORT={waapi_port!r}")

    for attr, env_name in (("port", "P4PORT"), ("user", "P4USER"), ("client", "P4CLIENT")):
        value = os.environ.get(env_name)
        if value:
            setattr(config.perforce, attr, value)

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values (see apply_env_overrides).
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
        config = _parse_config(toml_data)
    except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError, AttributeError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        config = Config()

    return apply_env_overrides(config)

