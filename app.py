import gradio as gr

from config_error_normalizer.handlers import describe_schema_handler, validate_handler

# --- UI Definition ---
with gr.Blocks(title="Config Error Normalizer") as demo:
    gr.Markdown("# Configuration Validator")
    gr.Markdown("Upload a configuration file and the JSON Schema it should follow to get a readable error report.")

    with gr.Row():
        # Left Panel: Inputs
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            config_input = gr.File(label="Configuration (JSON, YAML or TOML)", file_types=[".json", ".yml", ".yaml", ".toml"])
            schema_input = gr.File(label="JSON Schema", file_types=[".json", ".yml", ".yaml"])
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Run")
            validate_btn = gr.Button("Validate", variant="primary")
            describe_btn = gr.Button("Describe Schema")

        # Right Panel: Output
        with gr.Column(scale=1):
            gr.Markdown("### 3. Report")
            report_output = gr.Textbox(label="Report", lines=20, interactive=False)

    validate_btn.click(
        fn=validate_handler,
        inputs=[config_input, schema_input],
        outputs=[report_output, status_msg],
    )

    describe_btn.click(
        fn=describe_schema_handler,
        inputs=[schema_input],
        outputs=[report_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
