from .loader import load_config
from .schema import WorkshopConfig, ImporterConfig, AnnotationConfig

__all__ = [
    "load_config",
    "WorkshopConfig",
    "ImporterConfig",
    "AnnotationConfig",
]
