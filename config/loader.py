"""
Configuration loader.

Loading runs in two passes over a single YAML parse:
- the static pass decodes the recognized top-level sections into ``Config``
- the strategy pass resolves every entry of ``exchangeStrategies`` and
  ``crossExchangeStrategies`` against the strategy registries and decodes
  its payload into the registered class

Supports:
- Loading from a YAML file (bbgo.yaml)
- Loading from .env files
- Environment variable expansion (${VAR} syntax)
- Config file discovery
- Importing strategy modules listed under ``imports``
"""

import importlib
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, Union

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from core.interfaces.strategy_base import StrategyConfigBase
from core.registry import (
    StrategyRegistry,
    cross_exchange_strategy_registry,
    exchange_strategy_registry,
)

from .base_config import RECOGNIZED_KEYS, Config, ExchangeStrategyMount
from .errors import (
    ConfigIOError,
    ExtensionDecodeError,
    ExtensionImportError,
    MalformedDocumentError,
    MalformedEntryError,
    MalformedSectionError,
    NoExtensionsRegisteredError,
    SchemaDecodeError,
    UnknownExtensionError,
)

logger = logging.getLogger(__name__)

Stash = Dict[str, Any]

EXCHANGE_STRATEGIES_KEY = "exchangeStrategies"
CROSS_EXCHANGE_STRATEGIES_KEY = "crossExchangeStrategies"
MOUNT_KEY = "on"

CONFIG_FILE_ENV_VAR = "TRADEBOT_CONFIG"
CONFIG_SEARCH_PATHS = (
    Path("config") / "bbgo.yaml",
    Path("~/.bbgo/bbgo.yaml"),
    Path("/etc/bbgo/bbgo.yaml"),
)


class _StashLoader(yaml.SafeLoader):
    """
    SafeLoader with YAML 1.2 style scalars.

    Only true/false are booleans, so ``on``/``off``/``yes``/``no`` keys and
    values stay strings, and dates are kept as plain strings. Floats follow
    the core schema, so an exponent without a dot (``1e-3``) is a float.
    """


_StashLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in (
            "tag:yaml.org,2002:bool",
            "tag:yaml.org,2002:float",
            "tag:yaml.org,2002:timestamp",
        )
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_StashLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
# plain integers are left to the int resolver
_StashLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(
        r"""^(?:[-+]?(?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?
        |[-+]?[0-9]+[eE][-+]?[0-9]+
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+.0123456789"),
)


def expand_env_vars(value: Any) -> Any:
    """
    Expand environment variables in string values.

    Supports ${VAR} syntax only; a bare $name is left alone since routing
    values such as "$symbol" use it. Lists and mappings are expanded
    recursively, other values are returned as-is. Unset variables expand to
    an empty string.

    Args:
        value: Any stash value

    Returns:
        Value with environment variables expanded
    """
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}

    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]

    if not isinstance(value, str):
        return value

    pattern = r'\$\{([^}]+)\}'

    def replace_env_var(match):
        var_name = match.group(1)
        return os.environ.get(var_name, "")

    # Keep replacing until no more changes (handles nested variables)
    result = value
    max_iterations = 10  # Prevent infinite loops
    for _ in range(max_iterations):
        new_result = re.sub(pattern, replace_env_var, result)
        if new_result == result:
            break
        result = new_result

    return result


def load_dotenv_files(project_dir: Optional[Union[str, Path]] = None) -> List[Path]:
    """
    Load .env files in order of precedence.

    Later files override earlier ones:
    1. .env.example (template, in git)
    2. .env (user-specific, git-ignored)
    3. .env.local (highest priority, git-ignored)

    Args:
        project_dir: Project directory (default: current working directory)

    Returns:
        The files that were loaded
    """
    project_dir = Path.cwd() if project_dir is None else Path(project_dir)

    dotenv_files = [
        project_dir / ".env.example",
        project_dir / ".env",
        project_dir / ".env.local",
    ]

    loaded = []
    for dotenv_file in dotenv_files:
        if dotenv_file.exists():
            load_dotenv(dotenv_file, override=True)
            loaded.append(dotenv_file)

    return loaded


def find_config_file(search_paths: Iterable[Union[str, Path]] = CONFIG_SEARCH_PATHS) -> Optional[Path]:
    """
    Locate the config file.

    The ``TRADEBOT_CONFIG`` environment variable wins; otherwise the first
    existing file of ``search_paths`` is returned.
    """
    env_value = os.environ.get(CONFIG_FILE_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()

    for candidate in search_paths:
        path = Path(candidate).expanduser()
        if path.is_file():
            return path

    return None


def read_config_file(config_path: Union[str, Path]) -> bytes:
    try:
        with open(config_path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ConfigIOError(str(config_path), e) from e


def load_stash(content: Union[bytes, str]) -> Stash:
    """
    Parse the whole document into plain dicts, lists and scalars.

    Raises:
        MalformedDocumentError: the content is not YAML, or its root is not a mapping
    """
    try:
        stash = yaml.load(content, Loader=_StashLoader)
    except yaml.YAMLError as e:
        raise MalformedDocumentError(f"invalid YAML document: {e}") from e

    if stash is None:
        return {}

    if not isinstance(stash, dict):
        raise MalformedDocumentError(
            f"config document should be a map, given: {type(stash).__name__}"
        )

    return stash


def decode_static(stash: Stash) -> Config:
    """
    Decode the recognized top-level sections into a ``Config``.

    Only the recognized keys are re-serialized and validated; the strategy
    sections and any unknown key are left out.

    Raises:
        SchemaDecodeError: a section does not match its schema
    """
    static = {key: stash[key] for key in RECOGNIZED_KEYS if key in stash}

    # YAML allows null for an empty section, treat it as absent
    static = {key: value for key, value in static.items() if value is not None}

    try:
        payload = _canonical_json(static)
    except (TypeError, ValueError) as e:
        raise SchemaDecodeError("", f"unsupported value: {e}") from e

    try:
        return Config.model_validate_json(payload)
    except ValidationError as e:
        error = e.errors()[0]
        path = ".".join(str(part) for part in error["loc"])
        raise SchemaDecodeError(path, error["msg"]) from e


def decode_strategy(
    identifier: str,
    prototype: Type[StrategyConfigBase],
    conf: Any,
) -> StrategyConfigBase:
    """
    Materialize a stash payload into the registered strategy class.

    The payload is re-encoded to canonical JSON and validated in strict mode,
    so a string where a number is expected is rejected instead of coerced.

    Raises:
        ExtensionDecodeError: the payload does not decode into ``prototype``
    """
    # A strategy with only default values may be written as `grid:` (null)
    if conf is None:
        conf = {}

    try:
        payload = _canonical_json(conf)
    except (TypeError, ValueError) as e:
        raise ExtensionDecodeError(identifier, repr(conf), e) from e

    try:
        return prototype.model_validate_json(payload, strict=True)
    except ValidationError as e:
        raise ExtensionDecodeError(identifier, payload, e) from e


def encode_strategy(strategy: StrategyConfigBase) -> Any:
    """Canonical generic form of a strategy, as it would appear in the stash"""
    return json.loads(_canonical_json(strategy.to_stash()))


def _canonical_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, allow_nan=False)


def _parse_mounts(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]

    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        # Ordered set: drop repeated session names, keep the first occurrence
        return list(dict.fromkeys(value))

    return []


def _strategy_entries(stash: Stash, section: str, registry: StrategyRegistry) -> Optional[List[Any]]:
    """Return the entries of a strategy section, None when the section is absent."""
    if section not in stash:
        return None

    entries = stash[section]
    if not isinstance(entries, list):
        raise MalformedSectionError(section, entries)

    if len(registry) == 0:
        raise NoExtensionsRegisteredError(section, registry.kind)

    return entries


def _resolve_entry(
    section: str,
    index: int,
    entry: Any,
    registry: StrategyRegistry,
    strict: bool,
) -> List[StrategyConfigBase]:
    if not isinstance(entry, dict):
        raise MalformedEntryError(section, index, entry)

    strategies = []
    for identifier, conf in entry.items():
        if identifier == MOUNT_KEY:
            continue

        prototype, ok = registry.lookup(identifier) if isinstance(identifier, str) else (None, False)
        if not ok:
            if strict:
                raise UnknownExtensionError(section, index, identifier)
            logger.debug(f"{section}[{index}]: skipping unregistered key {identifier!r}")
            continue

        strategies.append(decode_strategy(identifier, prototype, conf))

    return strategies


def load_exchange_strategies(
    config: Config,
    stash: Stash,
    registry: Optional[StrategyRegistry] = None,
    strict: bool = False,
) -> None:
    """
    Resolve ``exchangeStrategies`` into ``config.exchange_strategies``.

    Every entry is a map holding an optional ``on`` mount (a session name or
    a list of session names) and one or more strategy identifiers. Each
    registered identifier produces one mount, in document order.
    """
    registry = exchange_strategy_registry if registry is None else registry

    entries = _strategy_entries(stash, EXCHANGE_STRATEGIES_KEY, registry)
    if entries is None:
        return

    mounts = []
    for index, entry in enumerate(entries):
        strategies = _resolve_entry(EXCHANGE_STRATEGIES_KEY, index, entry, registry, strict)
        targets = _parse_mounts(entry.get(MOUNT_KEY))
        for strategy in strategies:
            mounts.append(ExchangeStrategyMount(mounts=list(targets), strategy=strategy))

    config.exchange_strategies.extend(mounts)


def load_cross_exchange_strategies(
    config: Config,
    stash: Stash,
    registry: Optional[StrategyRegistry] = None,
    strict: bool = False,
) -> None:
    """
    Resolve ``crossExchangeStrategies`` into ``config.cross_exchange_strategies``.

    Same entry shape as ``exchangeStrategies``; an ``on`` key is ignored.
    """
    registry = cross_exchange_strategy_registry if registry is None else registry

    entries = _strategy_entries(stash, CROSS_EXCHANGE_STRATEGIES_KEY, registry)
    if entries is None:
        return

    strategies = []
    for index, entry in enumerate(entries):
        strategies.extend(
            _resolve_entry(CROSS_EXCHANGE_STRATEGIES_KEY, index, entry, registry, strict)
        )

    config.cross_exchange_strategies.extend(strategies)


def _load_document(config_path: Union[str, Path], use_env: bool) -> Stash:
    stash = load_stash(read_config_file(config_path))
    if use_env:
        stash = expand_env_vars(stash)
    return stash


def preload_config(config_path: Union[str, Path], use_env: bool = False) -> Config:
    """
    Load the static sections only, without resolving strategies.

    Used to read ``imports`` before the strategy modules are imported.
    """
    return decode_static(_load_document(config_path, use_env))


def load_config(
    config_path: Union[str, Path],
    exchange_registry: Optional[StrategyRegistry] = None,
    cross_exchange_registry: Optional[StrategyRegistry] = None,
    use_env: bool = False,
    strict: bool = False,
) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML document
        exchange_registry: Single-exchange registry (default: global registry)
        cross_exchange_registry: Cross-exchange registry (default: global registry)
        use_env: Expand ${VAR} references with the process environment
        strict: Reject strategy entry keys that are not registered identifiers

    Returns:
        Config instance

    Raises:
        ConfigError: any loading failure; no partially loaded config is returned
    """
    stash = _load_document(config_path, use_env)

    config = decode_static(stash)
    load_exchange_strategies(config, stash, exchange_registry, strict=strict)
    load_cross_exchange_strategies(config, stash, cross_exchange_registry, strict=strict)

    logger.info(
        f"loaded {config_path}: {len(config.sessions)} sessions, "
        f"{len(config.exchange_strategies)} exchange strategies, "
        f"{len(config.cross_exchange_strategies)} cross exchange strategies"
    )

    return config


def import_extensions(imports: Sequence[str]) -> List[str]:
    """
    Import strategy modules so they register themselves.

    Returns:
        The imported module names

    Raises:
        ExtensionImportError: a module cannot be imported
    """
    imported = []
    for module_name in imports:
        try:
            importlib.import_module(module_name)
        except Exception as e:
            raise ExtensionImportError(module_name, e) from e
        logger.debug(f"imported strategy module {module_name}")
        imported.append(module_name)

    return imported
