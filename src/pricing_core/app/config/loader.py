from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from pricing_core.app.models.config import PricingProfile

SUPPORTED_SCHEMA_VERSIONS = {1}


def load_pricing_profile(path: str | Path) -> PricingProfile:
    data: Dict[str, Any]
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    profile = PricingProfile.model_validate(data)
    if profile.schema_version not in SUPPORTED_SCHEMA_VERSIONS:
        raise ValueError(f"Unsupported schema_version {profile.schema_version}")
    return profile
