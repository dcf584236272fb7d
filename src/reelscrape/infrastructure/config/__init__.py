from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, SiteProfile, SiteSelectors

__all__ = ["AppConfig", "EnvOverrides", "SiteProfile", "SiteSelectors", "load_config"]
