"""Core functionality for component synthesis.

This module provides the non-UI components of Vision Bootstrap:

- **VisionBootstrapConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **GenerationClient**: Gemini client with the stock image tool round-trip
- **SynthesisPipeline**: One run from user inputs to a finished project
- **ProjectStore**: Persisted project history

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with VBS_ in .env files
   - Automatic directory creation

2. **Data Model Layer** (models.py, errors.py):
   - Pydantic models for requests, backend results, and projects
   - Camel-case aliases matching the backend schema and the history file

3. **Backend Layer** (generation_client.py, stock_images.py, prompts.py):
   - Two-turn Gemini exchange: optional tool round-trip, then schema-bound JSON
   - Freepik search with a fixed fallback image list

4. **Orchestration and Persistence** (pipeline.py, project_store.py, export.py):
   - Theme/variation merge and project assembly
   - Atomic JSON history file
   - Standalone Bootstrap documents for preview and export

Usage Example
-------------
    from visionbootstrap.core import GenerationClient, ProjectStore, SynthesisPipeline, config
    from visionbootstrap.core.models import GenerationRequest

    store = ProjectStore(config.history_path)
    pipeline = SynthesisPipeline(GenerationClient(config))
    project = pipeline.run(GenerationRequest(style="Glassmorphism"), name="Pricing")
    store.save(project)
"""

from visionbootstrap.core.config import VisionBootstrapConfig, config
from visionbootstrap.core.generation_client import GenerationClient
from visionbootstrap.core.pipeline import SynthesisPipeline
from visionbootstrap.core.project_store import ProjectStore

__all__ = [
    "GenerationClient",
    "ProjectStore",
    "SynthesisPipeline",
    "VisionBootstrapConfig",
    "config",
]
