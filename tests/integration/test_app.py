"""Integration tests for the Gradio app construction."""

import gradio as gr

from visionbootstrap.ui.app import create_ui
from visionbootstrap.ui.components import SynthesisForm, WorkspaceView
from visionbootstrap.ui.handlers import WORKSPACE_FIELDS


class TestCreateUI:
    """Build the Blocks app without launching it."""

    def test_returns_blocks_and_css(self, services):
        app, css = create_ui(services)
        assert isinstance(app, gr.Blocks)
        assert ".vbs-style-grid" in css

    def test_registers_events(self, services):
        app, _ = create_ui(services)
        assert len(app.fns) >= 10


class TestComponents:
    """Component wiring used by the handlers."""

    def test_output_components_match_fields(self):
        with gr.Blocks():
            view = WorkspaceView()
            view.build_sidebar()
            view.build_header()
            form = SynthesisForm()
            view.attach_form(form)
            view.build_generating_panel()
            view.build_viewer()

        outputs = view.get_output_components()

        assert len(outputs) == len(WORKSPACE_FIELDS)
        assert outputs[WORKSPACE_FIELDS.index("start_button")] is form.start_button
        assert outputs[WORKSPACE_FIELDS.index("form_group")] is form.group
        assert isinstance(outputs[WORKSPACE_FIELDS.index("thumbnails")], gr.Gallery)

    def test_input_components_order(self):
        with gr.Blocks():
            form = SynthesisForm()
        assert form.get_input_components() == [
            form.name,
            form.style,
            form.structure_guide,
            form.content,
            form.image,
        ]
