"""
form_state Demo - Registration Form

This Gradio app renders the registration form and drives it through a
FormController:
1. Text boxes are written through field adapters
2. Date drop-downs are written with set_value
3. Register validates the whole form and shows per-field errors
"""

import gradio as gr

from form_state.config import get_config, get_theme
from form_state.forms.registration import (
    CHOICE_FIELDS,
    TEXT_FIELDS,
    choice_options,
    submit_registration,
)
from form_state.log import get_logger, setup_logging

logger = get_logger("demo")

FIELD_ORDER = TEXT_FIELDS + CHOICE_FIELDS

THEME_SCRIPTS = {
    "dark": "() => { document.body.classList.add('dark'); }",
    "light": "() => { document.body.classList.remove('dark'); }",
}


def _error_markdown(message: str | None) -> str:
    return f"<span style='color:#ef4444;font-size:0.75rem'>{message}</span>" if message else ""


def register(first_name, last_name, email, company, month, day, year):
    """Submit the registration form and report errors for each control."""
    submitted: list = []
    result, field_errors = submit_registration(
        {
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
            "company": company,
            "dateOfBirth.month": month,
            "dateOfBirth.day": day,
            "dateOfBirth.year": year,
        },
        on_valid=submitted.append,
    )

    if result.is_valid:
        logger.info(f"Registration received: {result.validated_data}")
        status = "## ✅ Registered!"
        data = result.validated_data
    else:
        status = f"## ❌ Please fix {result.error_count} field(s)"
        data = {}

    return [status, data] + [_error_markdown(field_errors[path]) for path in FIELD_ORDER]


options = choice_options()

# Create Gradio Interface
with gr.Blocks(title="Registration", js=THEME_SCRIPTS.get(get_theme())) as demo:
    gr.Markdown("# Registration")

    with gr.Row():
        with gr.Column():
            first_name_input = gr.Textbox(label="First Name")
            first_name_error = gr.Markdown()
        with gr.Column():
            last_name_input = gr.Textbox(label="Last Name")
            last_name_error = gr.Markdown()

    with gr.Row():
        with gr.Column():
            email_input = gr.Textbox(label="E-mail", type="email")
            email_error = gr.Markdown()
        with gr.Column():
            company_input = gr.Textbox(label="Company")
            company_error = gr.Markdown()

    with gr.Row():
        with gr.Column():
            month_input = gr.Dropdown(choices=options["dateOfBirth.month"], label="Date of birth", info="Month")
            month_error = gr.Markdown()
        with gr.Column():
            day_input = gr.Dropdown(choices=options["dateOfBirth.day"], label="Day")
            day_error = gr.Markdown()
        with gr.Column():
            year_input = gr.Dropdown(choices=options["dateOfBirth.year"], label="Year")
            year_error = gr.Markdown()

    register_btn = gr.Button("Register", variant="primary", size="lg")
    status_md = gr.Markdown()
    submitted_json = gr.JSON(label="Submitted Data")

    register_btn.click(
        fn=register,
        inputs=[first_name_input, last_name_input, email_input, company_input, month_input, day_input, year_input],
        outputs=[
            status_md,
            submitted_json,
            first_name_error,
            last_name_error,
            company_error,
            email_error,
            month_error,
            day_error,
            year_error,
        ],
    )


if __name__ == "__main__":
    setup_logging()
    config = get_config()
    demo.launch(server_name=config.demo_host, server_port=config.demo_port)
