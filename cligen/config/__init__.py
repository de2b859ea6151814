from .loader import ConfigLoaderError, load_generator_config
from .schema import GeneratorConfig, default_output_path

__all__ = [
    "ConfigLoaderError",
    "GeneratorConfig",
    "default_output_path",
    "load_generator_config",
]
