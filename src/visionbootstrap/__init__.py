"""Vision Bootstrap - Reference image to Bootstrap 5 component variations."""

__version__ = "0.1.0"

from visionbootstrap.core.config import VisionBootstrapConfig, config
from visionbootstrap.core.models import ComponentVariation, GeneratedProject, GenerationRequest

__all__ = [
    "ComponentVariation",
    "GeneratedProject",
    "GenerationRequest",
    "VisionBootstrapConfig",
    "config",
]
