from .loader import TrellisConfig, load_config_from_path

__all__ = ["TrellisConfig", "load_config_from_path"]
