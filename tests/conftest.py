"""Shared pytest fixtures for Vision Bootstrap tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import Mock

import pytest

from visionbootstrap.core.config import VisionBootstrapConfig
from visionbootstrap.core.models import (
    ComponentVariation,
    GeneratedProject,
    PipelineResult,
    RawVariation,
    ThemeDescriptor,
)
from visionbootstrap.core.project_store import ProjectStore
from visionbootstrap.ui.models import WorkspaceState
from visionbootstrap.ui.services import WorkspaceServices


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> VisionBootstrapConfig:
    """Create a test configuration with temporary directories.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        VisionBootstrapConfig instance for testing
    """
    return VisionBootstrapConfig(
        gemini_api_key="test-key",  # Never used; the client is always mocked
        freepik_api_key="test-freepik-key",
        data_dir=temp_dir / "data",
        export_dir=temp_dir / "exports",
        log_interval=0.01,
    )


@pytest.fixture
def pipeline_result() -> PipelineResult:
    """Backend result with four variations and two themes.

    Returns:
        PipelineResult where only V1 has a matching theme description
    """
    return PipelineResult(
        themes=[
            ThemeDescriptor(name="V1", description="A"),
            ThemeDescriptor(name="Unused", description="Never matched"),
        ],
        guide="Use the card on pricing pages.",
        content="Pro plan, $29/month",
        variations=[
            RawVariation(theme_name=f"V{i}", html=f"<div class='v{i}'>Pro</div>", css=f".v{i}{{color:red}}")
            for i in range(1, 5)
        ],
    )


@pytest.fixture
def make_project() -> Callable[..., GeneratedProject]:
    """Factory for saved projects.

    Returns:
        Function taking ``project_id`` plus optional field overrides
    """

    def _make(project_id: str = "p1", **overrides) -> GeneratedProject:
        fields = dict(
            id=project_id,
            name=f"Project {project_id}",
            style="Modern",
            created_at=1_700_000_000_000,
            reference_image=None,
            variations=tuple(
                ComponentVariation(
                    theme_name=f"V{i}",
                    html=f"<p>x{i}</p>",
                    css=f"p{{color:red}} /* {i} */",
                    description=f"Theme {i}",
                )
                for i in range(1, 5)
            ),
            guide="guide",
            structure_guide="card",
            content="content",
        )
        fields.update(overrides)
        return GeneratedProject(**fields)

    return _make


@pytest.fixture
def project(make_project) -> GeneratedProject:
    """A single saved project with four variations."""
    return make_project()


@pytest.fixture
def store(test_config: VisionBootstrapConfig) -> ProjectStore:
    """Empty project store in the temporary data directory."""
    return ProjectStore(test_config.history_path)


@pytest.fixture
def services(test_config: VisionBootstrapConfig, store: ProjectStore) -> Generator[WorkspaceServices, None, None]:
    """Workspace services with a mocked generation client.

    Yields:
        WorkspaceServices; set ``services.client.generate`` per test
    """
    services = WorkspaceServices(
        config=test_config,
        store=store,
        client=Mock(),
        poll_interval=0.01,
    )
    try:
        yield services
    finally:
        services.shutdown()


@pytest.fixture
def workspace_state() -> WorkspaceState:
    """Create an idle workspace state for testing.

    Returns:
        WorkspaceState instance
    """
    return WorkspaceState()
