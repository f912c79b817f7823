"""Gradio UI for the Vision Bootstrap Synthesis Engine."""

import logging
from functools import partial

import gradio as gr

from visionbootstrap.core.config import config

from .components import SynthesisForm, WorkspaceView
from .handlers import (
    close_project,
    delete_project,
    dismiss_notice,
    export_variation,
    load_workspace,
    new_project,
    run_synthesis,
    select_project,
    select_thumbnail,
    select_variation,
    set_device_frame,
    set_display_mode,
)
from .models import WorkspaceState
from .services import WorkspaceServices, initialize_services

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui(services: WorkspaceServices) -> tuple[gr.Blocks, str]:
    """Create the single-page workspace.

    Args:
        services: Store, client, and executor shared by all sessions

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .vbs-style-grid .wrap {
        display: grid;
        grid-template-columns: repeat(auto-fill, minmax(130px, 1fr));
        max-height: 220px;
        overflow-y: auto;
    }
    .vbs-preview {
        background: #f3f4f6;
        border-radius: 8px;
        padding: 12px;
    }
    .vbs-void {
        padding: 80px 0;
        text-align: center;
        color: #9ca3af;
        letter-spacing: 0.2em;
        text-transform: uppercase;
    }
    """

    app = gr.Blocks(title="Vision Bootstrap")

    with app:
        # Session state - one instance per user
        workspace_state = gr.State(WorkspaceState())

        gr.Markdown(
            """
            # Vision Bootstrap
            ### Reference image to four Bootstrap 5 component variations
            """
        )

        view = WorkspaceView()

        with gr.Row():
            with gr.Column(scale=1, min_width=260):
                view.build_sidebar()
            with gr.Column(scale=4):
                view.build_header()
                form = SynthesisForm()
                view.attach_form(form)
                view.build_generating_panel()
                view.build_viewer()

        outputs = view.get_output_components() + [workspace_state]

        app.load(
            fn=partial(load_workspace, services=services),
            inputs=[workspace_state],
            outputs=outputs,
        )

        # Synthesis: one run at a time across sessions
        form.start_button.click(
            fn=partial(run_synthesis, services=services),
            inputs=form.get_input_components() + [workspace_state],
            outputs=outputs,
            concurrency_limit=1,
            concurrency_id="synthesis",
        )

        # History sidebar
        view.history.input(
            fn=partial(select_project, services=services),
            inputs=[view.history, workspace_state],
            outputs=outputs,
        )

        # SelectData is injected by type hint, so this stays a plain function
        def open_thumbnail(evt: gr.SelectData, state: WorkspaceState):
            return select_thumbnail(evt.index, state, services)

        view.thumbnails.select(
            fn=open_thumbnail,
            inputs=[workspace_state],
            outputs=outputs,
        )
        view.delete_button.click(
            fn=partial(delete_project, services=services),
            inputs=[view.history, workspace_state],
            outputs=outputs,
        )
        view.new_button.click(
            fn=partial(new_project, services=services),
            inputs=[workspace_state],
            outputs=outputs + form.get_input_components(),
        )

        # Viewer controls
        view.back_button.click(
            fn=partial(close_project, services=services),
            inputs=[workspace_state],
            outputs=outputs,
        )
        view.variation.input(
            fn=partial(select_variation, services=services),
            inputs=[view.variation, workspace_state],
            outputs=outputs,
        )
        view.display_mode.input(
            fn=partial(set_display_mode, services=services),
            inputs=[view.display_mode, workspace_state],
            outputs=outputs,
        )
        view.device_frame.input(
            fn=partial(set_device_frame, services=services),
            inputs=[view.device_frame, workspace_state],
            outputs=outputs,
        )
        view.dismiss_button.click(
            fn=partial(dismiss_notice, services=services),
            inputs=[workspace_state],
            outputs=outputs,
        )
        view.export_button.click(
            fn=partial(export_variation, services=services),
            inputs=[workspace_state],
            outputs=[view.export_file],
        )

    return app, custom_css


def main():
    """Main entry point for the application."""
    logger.info("Starting Vision Bootstrap...")
    logger.info(
        f"Configuration: {config.model_dump(exclude={'gemini_api_key', 'freepik_api_key'})}"
    )

    if not config.gemini_api_key:
        logger.warning("No Gemini API key configured; synthesis requests will fail")

    services = initialize_services(config)
    app, custom_css = create_ui(services)

    logger.info(f"Launching Gradio UI on {config.server_name}:{config.server_port}")

    try:
        app.launch(
            server_name=config.server_name,
            server_port=config.server_port,
            share=config.share,
            show_error=True,
            inbrowser=False,
            css=custom_css,
        )
    finally:
        services.shutdown()


if __name__ == "__main__":
    main()
