"""Reusable UI components for the Vision Bootstrap Gradio interface."""

import gradio as gr

from visionbootstrap.core.models import DEFAULT_STYLE, STYLE_OPTIONS
from visionbootstrap.core.prompts import DEFAULT_STRUCTURE_GUIDE, DEFAULT_USER_CONTENT

from .handlers.workspace import WORKSPACE_FIELDS


class SynthesisForm:
    """Form collecting the inputs for one synthesis run.

    Has a reference image upload, the project name, the style selector, and
    the structure and content text areas, followed by the start button.
    """

    def __init__(self):
        with gr.Column(visible=True) as self.group:
            with gr.Row():
                with gr.Column(scale=1):
                    self.image = gr.Image(
                        label="Reference Image",
                        type="filepath",
                        sources=["upload", "clipboard"],
                        height=260,
                    )
                with gr.Column(scale=2):
                    self.name = gr.Textbox(
                        label="Project Name",
                        placeholder="Leave blank for '<style> Project'",
                        max_lines=1,
                    )
                    self.style = gr.Radio(
                        label="Style",
                        choices=list(STYLE_OPTIONS),
                        value=DEFAULT_STYLE,
                        elem_classes=["vbs-style-grid"],
                    )

            with gr.Row():
                self.structure_guide = gr.Textbox(
                    label="Structure Guide",
                    placeholder=DEFAULT_STRUCTURE_GUIDE,
                    lines=6,
                )
                self.content = gr.Textbox(
                    label="Content",
                    placeholder=DEFAULT_USER_CONTENT,
                    lines=6,
                )

            self.start_button = gr.Button("✨ Begin Synthesis", variant="primary", size="lg")

    def get_input_components(self) -> list[gr.components.Component]:
        """Return components passed to the synthesis handler.

        Order matches ``run_synthesis(name, style, structure_guide, content,
        image_path, ...)``.
        """
        return [self.name, self.style, self.structure_guide, self.content, self.image]


class WorkspaceView:
    """Sidebar, progress panel, and viewer driven by ``render_workspace``.

    Components are created inside the caller's layout, one ``build_*`` call
    per panel; the form group and start button come from :class:`SynthesisForm`.
    """

    def attach_form(self, form: SynthesisForm) -> None:
        self.form_group = form.group
        self.start_button = form.start_button

    def build_sidebar(self) -> None:
        gr.Markdown("### Project History")
        self.thumbnails = gr.Gallery(
            label="References",
            columns=3,
            height=220,
            allow_preview=False,
            show_label=False,
            interactive=False,
        )
        self.history = gr.Radio(label="Projects", choices=[], value=None)
        with gr.Row():
            self.delete_button = gr.Button("🗑️ Delete", variant="secondary", size="sm")
            self.new_button = gr.Button("➕ New Project", variant="secondary", size="sm")

    def build_header(self) -> None:
        self.header = gr.Markdown("## Synthesis Config")
        with gr.Row():
            self.notice = gr.Markdown(value="", visible=False)
            self.dismiss_button = gr.Button("Dismiss", size="sm", scale=0, visible=False)

    def build_generating_panel(self) -> None:
        with gr.Column(visible=False) as self.generating_group:
            self.elapsed = gr.Markdown("### 0s\nTime Elapsed")
            self.progress_log = gr.Markdown("")

    def build_viewer(self) -> None:
        with gr.Column(visible=False) as self.viewer_group:
            with gr.Row():
                self.back_button = gr.Button("← Back", size="sm", scale=0)
                self.variation = gr.Radio(label="Version", choices=[], value=None, scale=2)
                self.display_mode = gr.Radio(
                    label="View",
                    choices=[("Preview", "preview"), ("Source", "source")],
                    value="preview",
                    scale=1,
                )
                self.device_frame = gr.Radio(
                    label="Frame",
                    choices=[("Desktop", "desktop"), ("Mobile", "mobile")],
                    value="desktop",
                    scale=1,
                )
            self.preview = gr.HTML(elem_classes=["vbs-preview"])
            self.source = gr.Code(label="Source", language="html", visible=False, interactive=False)

            with gr.Accordion("Copy Code", open=False):
                with gr.Row():
                    self.html_code = gr.Code(label="HTML", language="html", interactive=False)
                    self.css_code = gr.Code(label="CSS", language="css", interactive=False)

            with gr.Row():
                self.export_button = gr.Button("⬇️ Export HTML", variant="secondary")
            self.export_file = gr.File(label="Export", visible=False, interactive=False)

    def get_output_components(self) -> list[gr.components.Component]:
        """Return components updated by ``render_workspace``, in its order."""
        return [getattr(self, field) for field in WORKSPACE_FIELDS]
