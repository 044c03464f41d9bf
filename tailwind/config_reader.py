"""
Config Reader Module
Loads tokens.json and the miniwing config file, falling back to defaults.
"""

import json
import logging
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from core.config_merger import MergeReport, log_merge_report, merge_with_report
from core.token_store import TokenTable, default_tokens

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_TOKENS_PATH = PROJECT_ROOT / 'tokens.json'
DEFAULT_CONFIG_PATH = PROJECT_ROOT / 'miniwing.config.json'

JS_CONFIG_SUFFIXES = ('.js', '.cjs')


class LoadStatus(str, Enum):
    LOADED = 'loaded'
    DEFAULTED = 'defaulted'
    ABSENT = 'absent'
    MALFORMED = 'malformed'


@dataclass
class TokenLoadResult:
    tokens: TokenTable
    config: Dict[str, Any] = field(default_factory=dict)
    token_status: LoadStatus = LoadStatus.LOADED
    config_status: LoadStatus = LoadStatus.ABSENT
    merge_report: Optional[MergeReport] = None
    config_path: Optional[Path] = None

    @property
    def outcome(self) -> str:
        """'override-merged' when the config contributed tokens, else how the base table was obtained.

        An override-merged table may sit on defaulted base tokens; token_status
        still records that, and describe() reports both.
        """
        if self.merge_report is not None and self.merge_report.total_merged:
            return 'override-merged'
        return self.token_status.value

    def describe(self) -> str:
        return f"{self.outcome} (tokens: {self.token_status.value}, config: {self.config_status.value})"


def load_tokens(tokens_path: Union[str, Path, None] = None) -> Tuple[TokenTable, LoadStatus]:
    """Read tokens.json; any failure falls back to the built-in defaults."""
    path = Path(tokens_path or DEFAULT_TOKENS_PATH).resolve()
    if not path.is_file():
        logger.warning(f"tokens.json not found at {path}, using defaults")
        return default_tokens(), LoadStatus.DEFAULTED
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error loading tokens from {path}: {e}")
        return default_tokens(), LoadStatus.DEFAULTED
    if not isinstance(data, dict):
        logger.error(f"Tokens file {path} does not contain a JSON object, using defaults")
        return default_tokens(), LoadStatus.DEFAULTED
    logger.info(f"Loaded tokens from: {path}")
    return TokenTable.from_dict(data), LoadStatus.LOADED


def parse_js_config(config_path: Path) -> Dict[str, Any]:
    """Evaluate a CommonJS config module with Node.js and return it as a dict."""
    node_script_path = str(config_path).replace('\\', '\\\\')
    node_script = f"""
    const config = require('{node_script_path}');
    console.log(JSON.stringify(config));
    """
    result = subprocess.run(['node', '-e', node_script], capture_output=True, text=True, check=True)
    return json.loads(result.stdout.strip())


def load_config(config_path: Union[str, Path, None] = None) -> Tuple[Dict[str, Any], LoadStatus]:
    """Read the override config (JSON, or a JS module via node). Failures yield an empty config."""
    path = Path(config_path or DEFAULT_CONFIG_PATH).resolve()
    if not path.is_file():
        logger.info(f"No config file found at {path}, using defaults")
        return {}, LoadStatus.ABSENT
    try:
        if path.suffix in JS_CONFIG_SUFFIXES:
            config = parse_js_config(path)
        else:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
    except subprocess.CalledProcessError as e:
        logger.warning(f"Failed to evaluate config {path}: {e.stderr.strip() if e.stderr else e}")
        return {}, LoadStatus.MALFORMED
    except (OSError, ValueError) as e:
        # OSError covers a missing node executable
        logger.warning(f"Warning loading config {path}: {e}")
        return {}, LoadStatus.MALFORMED
    if not isinstance(config, dict):
        logger.warning(f"Config {path} is not an object, ignoring it")
        return {}, LoadStatus.MALFORMED
    logger.info(f"Loaded config from: {path}")
    return config, LoadStatus.LOADED


def load_and_merge_tokens(tokens_path: Union[str, Path, None] = None,
                          config_path: Union[str, Path, None] = None) -> TokenLoadResult:
    """Load the base tokens and the config, then merge the config's overrides on top."""
    tokens, token_status = load_tokens(tokens_path)
    config_file = Path(config_path or DEFAULT_CONFIG_PATH).resolve()
    config, config_status = load_config(config_file)
    report = merge_with_report(tokens, config)
    log_merge_report(report)
    return TokenLoadResult(
        tokens=report.tokens,
        config=config,
        token_status=token_status,
        config_status=config_status,
        merge_report=report,
        config_path=config_file,
    )
