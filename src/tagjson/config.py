from collections.abc import Callable
from dataclasses import dataclass
import os
from typing import Any, Literal

HookStrategy = Literal["lookup", "patch"]


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# Environment variable mapping: field_name -> (env_var, default_value, type_converter)
ENV_VAR_MAPPING: dict[str, tuple[str, Any, Callable[[str], Any]]] = {
    # Hook activation
    "strategy": ("TAGJSON_STRATEGY", "lookup", str),
    "hook_name": ("TAGJSON_HOOK_NAME", "__json__", str),
    # Text output
    "indent": ("TAGJSON_INDENT", None, int),
    "ensure_ascii": ("TAGJSON_ENSURE_ASCII", "true", _to_bool),
    "sort_keys": ("TAGJSON_SORT_KEYS", "false", _to_bool),
    "allow_nan": ("TAGJSON_ALLOW_NAN", "true", _to_bool),
}


@dataclass
class Config:
    """Configuration for the tagjson library"""

    # "lookup": the encoder consults the active bindings directly
    # "patch": hooks are installed on the registered classes for each session
    strategy: HookStrategy = "lookup"
    hook_name: str = "__json__"

    # Passed through to json.dumps
    indent: int | None = None
    ensure_ascii: bool = True
    sort_keys: bool = False
    allow_nan: bool = True

    @staticmethod
    def from_env(**overrides) -> "Config":
        """Load configuration from environment variables"""
        config_dict = {}

        for field_name, (env_var, default_value, type_converter) in ENV_VAR_MAPPING.items():
            env_value = os.getenv(env_var)

            if env_value is None:
                if default_value is not None:
                    config_dict[field_name] = type_converter(default_value)
                else:
                    config_dict[field_name] = None
            else:
                config_dict[field_name] = type_converter(env_value)

        config_dict.update(overrides)

        Config._validate(config_dict)

        return Config(**config_dict)

    @staticmethod
    def _validate(config: dict):
        """Validate configuration after initialization."""
        if config["strategy"] not in ("lookup", "patch"):
            raise ValueError("strategy must be 'lookup' or 'patch'")
        if not isinstance(config["hook_name"], str) or not config["hook_name"].isidentifier():
            raise ValueError("hook_name must be a valid Python identifier")
        if config["indent"] is not None and config["indent"] < 0:
            raise ValueError("indent must be non-negative")

    def dumps_kwargs(self) -> dict[str, Any]:
        """Keyword arguments forwarded to json.dumps."""
        return {
            "ensure_ascii": self.ensure_ascii,
            "sort_keys": self.sort_keys,
            "allow_nan": self.allow_nan,
        }


_global_config: Config | None = None


def set_global_config(**overrides) -> None:
    """Set global configuration for the tagjson library.

    Serializers created without an explicit config use the global one.

    Args:
        **overrides: Configuration options to override. All options can also be
            set via environment variables.

    Options:
        strategy (str): How registered hooks are activated during an encode.
            "lookup" hands the active bindings to the encoder; "patch" installs
            a hook method on each registered class and restores it afterwards.
            Env var: TAGJSON_STRATEGY
            Default: "lookup"

        hook_name (str): Name of the zero-argument serialization method the
            encoder looks for on values
            Env var: TAGJSON_HOOK_NAME
            Default: "__json__"

        indent (int | None): Default indentation for text output
            Env var: TAGJSON_INDENT
            Default: None (compact)

        ensure_ascii (bool): Escape non-ASCII characters
            Env var: TAGJSON_ENSURE_ASCII
            Default: True

        sort_keys (bool): Sort object keys in text output
            Env var: TAGJSON_SORT_KEYS
            Default: False

        allow_nan (bool): Allow NaN and Infinity in text output
            Env var: TAGJSON_ALLOW_NAN
            Default: True

    Examples:
        # Install hooks on the registered classes instead of using a lookup
        set_global_config(strategy='patch')

        # Pretty printed, stable output
        set_global_config(indent=2, sort_keys=True)

    Note:
        Configuration precedence (highest to lowest):
        1. Keyword arguments to set_global_config()
        2. Environment variables
        3. Default values
    """
    global _global_config
    _global_config = Config.from_env(**overrides)


def get_global_config() -> Config:
    """Get global configuration for the tagjson library, initializing from environment if not set"""
    global _global_config
    if _global_config is None:
        _global_config = Config.from_env()

    return _global_config
