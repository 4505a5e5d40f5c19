# app_launcher.py

"""Serves the API under /api and the Gradio interface at / from one uvicorn process."""

import gradio as gr
import uvicorn

from trainify.app import app
from trainify.config import get_settings
from trainify_ui.plan_ui_gradio import demo

gr.mount_gradio_app(app, demo, path="/")

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
