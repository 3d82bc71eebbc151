"""YAML parameter loading.

Parameter files have up to three sections, `chain`, `liquidity` and
`order`, each mapping onto the matching config class.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from ..builders.chain_builder import ChainConfig
from ..builders.liquidity import LiquidityConfig
from ..risk.order_valuator import OrderConfig
from .error_handling import ConfigurationError

logger = logging.getLogger("prediction_options.config")

DEFAULT_PARAMS_PATH = Path(__file__).parent.parent / "config" / "default_params.yaml"


@dataclass(frozen=True)
class EngineParams:
    """All configuration needed to build chains and value orders."""

    chain: ChainConfig
    liquidity: LiquidityConfig
    order: OrderConfig


def load_params(path: Optional[str | Path] = None) -> EngineParams:
    """Load engine parameters from a YAML file.

    Args:
        path: YAML file path. None loads the packaged defaults.

    Returns:
        EngineParams with missing sections/keys at their defaults

    Raises:
        ConfigurationError: If the file is missing, unparseable or a
            section is not a mapping
    """
    params_path = Path(path) if path is not None else DEFAULT_PARAMS_PATH
    if not params_path.exists():
        raise ConfigurationError(f"Parameter file not found: {params_path}")

    try:
        with open(params_path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {params_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{params_path} must contain a mapping at the top level")

    sections = {}
    for name in ("chain", "liquidity", "order"):
        section = raw.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"Section '{name}' in {params_path} must be a mapping")
        sections[name] = section

    logger.info("Loaded parameters from %s", params_path)
    return EngineParams(
        chain=ChainConfig.from_dict(sections["chain"]),
        liquidity=LiquidityConfig.from_dict(sections["liquidity"]),
        order=OrderConfig.from_dict(sections["order"]),
    )
