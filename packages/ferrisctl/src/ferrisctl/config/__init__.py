from .loader import CONFIG_FILENAME, load_config
from .model import FerrisConfig, LabelSpec

__all__ = ["CONFIG_FILENAME", "FerrisConfig", "LabelSpec", "load_config"]
