"""Long-lived collaborators shared by the workspace handlers.

Session state (:class:`~visionbootstrap.ui.models.WorkspaceState`) lives in a
``gr.State`` and is copied per session; the objects here hold locks, threads,
and network clients, so they are created once per app and handed to the
handlers explicitly.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from visionbootstrap.core.config import VisionBootstrapConfig
from visionbootstrap.core.config import config as default_config
from visionbootstrap.core.generation_client import GenerationClient
from visionbootstrap.core.pipeline import SynthesisPipeline
from visionbootstrap.core.project_store import ProjectStore

logger = logging.getLogger(__name__)


@dataclass
class WorkspaceServices:
    """Collaborators used by the UI handlers.

    Attributes
    ----------
    config : VisionBootstrapConfig
        Application configuration
    store : ProjectStore
        Persisted project history
    client : GenerationClient
        Generative backend client (shared by all runs)
    executor : ThreadPoolExecutor
        Runs the pipeline off the event handler thread (one run at a time)
    poll_interval : float
        Seconds between progress refreshes while a run is in flight
    """

    config: VisionBootstrapConfig
    store: ProjectStore
    client: GenerationClient
    executor: ThreadPoolExecutor = field(
        default_factory=lambda: ThreadPoolExecutor(max_workers=1, thread_name_prefix="synthesis")
    )
    poll_interval: float = 0.25

    def create_pipeline(self) -> SynthesisPipeline:
        """Create a pipeline for one run."""
        return SynthesisPipeline(self.client)

    def shutdown(self) -> None:
        """Release the executor."""
        self.executor.shutdown(wait=False)


def initialize_services(config: VisionBootstrapConfig | None = None) -> WorkspaceServices:
    """Create the store and client from configuration.

    Args:
        config: Configuration (defaults to the global config)

    Returns:
        Ready-to-use WorkspaceServices
    """
    cfg = config or default_config
    logger.info(f"Initializing workspace services (history: {cfg.history_path})")
    return WorkspaceServices(
        config=cfg,
        store=ProjectStore(cfg.history_path),
        client=GenerationClient(cfg),
    )
