from spindown.common.config.bound import BoundConfig, get_config
from spindown.common.config.unbound import Config

__all__ = ["BoundConfig", "Config", "get_config"]
