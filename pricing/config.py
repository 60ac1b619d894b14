"""
Runtime Fee Configuration

Per-channel percent_rate / fixed_fee can be adjusted through environment
variables, e.g. PRICING_CAPPED_PERCENT_RATE=14 or PRICING_FLAT_RATE_FIXED_FEE=0.39.
The commission cap and the bracket table are not configurable here.
"""

import os

from .models import Channel, FeeConfig
from .validators import InputValidator

ENV_PREFIX = "PRICING_"
ADJUSTABLE_FIELDS = ("percent_rate", "fixed_fee")


def env_overrides(environ=None) -> dict:
    """Collect channel overrides from the environment."""
    environ = os.environ if environ is None else environ

    overrides = {}
    for channel in Channel:
        values = {}
        for field_name in ADJUSTABLE_FIELDS:
            raw = environ.get(f"{ENV_PREFIX}{channel.name}_{field_name.upper()}", "").strip()
            if raw:
                values[field_name] = raw
        if values:
            overrides[channel.value] = values
    return overrides


def load_fee_config(environ=None) -> FeeConfig:
    """Default fee configuration with any environment overrides applied."""
    config = FeeConfig.default().with_overrides(env_overrides(environ))
    InputValidator().validate_config(config)
    return config
