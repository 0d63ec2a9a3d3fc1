from ._log_helper import debug, error, warn
from ._validator import Validator
from ._yaml_loader import YamlLoader
from .data_model import DataModel

__all__ = [
    "DataModel",
    "Validator",
    "YamlLoader",
    "debug",
    "error",
    "warn",
]
