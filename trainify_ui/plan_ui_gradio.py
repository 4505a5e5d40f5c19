# trainify_ui/plan_ui_gradio.py

"""
Gradio Blocks layout for Trainify AI.

Three views share the page: the setup form, the loading carousel shown while
plans are generated, and the results (one tab per plan, rendered from
`RenderBlock`s with their Image and Listen/Stop actions).
"""

from __future__ import annotations

import gradio as gr
from gradio.themes.base import Base

from trainify.blocks import RenderBlock, blocks_to_markdown
from trainify.content import FACT_ROTATION_SECONDS
from trainify.schemas import DIETS, GENDERS, GOALS, LEVELS, LOCATIONS
from trainify.text_format import PlanCategory
from trainify_ui.handlers import (
    back_to_form,
    export_pdf,
    fact_markdown,
    generate_plans,
    mark_today_done,
    on_audio_end,
    on_player_halted,
    quote_markdown,
    request_image,
    restore_saved_plans,
    streak_html,
    suggested_reads_markdown,
    toggle_day_audio,
)


# ============================================================
# 🎨 THEME
# ============================================================

class TrainifyTheme(Base):
    def __init__(self):
        super().__init__(
            primary_hue=gr.themes.colors.orange,
            secondary_hue=gr.themes.colors.emerald,
            neutral_hue=gr.themes.colors.zinc,
            font=(
                gr.themes.GoogleFont("Inter"),
                "ui-sans-serif",
                "system-ui",
                "sans-serif",
            ),
        )
        self.set(
            body_background_fill="#0f0f12",
            body_background_fill_dark="#0f0f12",
            body_text_color="#f4f4f5",
            body_text_color_dark="#f4f4f5",

            button_primary_background_fill="#f97316",
            button_primary_background_fill_dark="#f97316",
            button_primary_text_color="#ffffff",

            button_secondary_background_fill="#27272a",
            button_secondary_background_fill_dark="#27272a",
            button_secondary_text_color="#f4f4f5",

            block_background_fill="#18181b",
            block_border_width="1px",
            block_border_color="#27272a",

            input_background_fill="#27272a",
            input_border_color="#3f3f46",
        )


css = """
.container { max-width: 1000px; margin: auto; }
.accent-primary { border-left: 4px solid rgba(249, 115, 22, 0.4); padding-left: 12px; }
.accent-secondary { border-left: 4px solid rgba(16, 185, 129, 0.4); padding-left: 12px; }
.accent-accent { border-left: 4px solid rgba(168, 85, 247, 0.4); padding-left: 12px; }
.day-header { margin-top: 16px; }
.streak-card { padding: 8px; border-radius: 8px; border: 1px solid #27272a; }
.streak-stats { display: flex; gap: 24px; justify-content: center; text-align: center; }
.streak-stats p { margin: 0; font-size: 0.75em; opacity: 0.7; }
.streak-grid { display: grid; grid-template-columns: repeat(7, 1fr); gap: 2px; margin-top: 6px; }
.streak-day { display: flex; flex-direction: column; align-items: center; border: 1px solid #27272a;
              border-radius: 4px; font-size: 0.7em; padding: 2px; }
.streak-day.done { background: rgba(249, 115, 22, 0.2); border-color: #f97316; }
.streak-day.today { border-color: #f97316; }
"""

TAB_TITLES = {
    PlanCategory.WORKOUT: "💪 Workout",
    PlanCategory.DIET: "🥗 Diet",
    PlanCategory.MOTIVATION: "❤️ Motivation",
}


# Cached copies of served clips and PDFs are swept hourly, keeping files under a day old.
with gr.Blocks(title="Trainify AI", theme=TrainifyTheme(), css=css, delete_cache=(3600, 86400)) as demo:

    # Global State
    manager_state = gr.State(None)
    render_tick = gr.State(0)
    carousel_tick = gr.State(0)
    browser_store = gr.BrowserState({}, storage_key="trainify-ai")

    gr.Markdown("# 🏋️ Trainify AI\nYour personalized workout, diet and motivation plans.", elem_classes="text-center")

    # --- STEP 1: SETUP FORM ---
    with gr.Column(visible=True, elem_classes="container") as form_col:
        gr.Markdown("### 👤 Tell us about yourself")
        with gr.Row():
            name_input = gr.Textbox(label="Name", placeholder="e.g. Alex")
            age_input = gr.Number(label="Age", precision=0, minimum=1, maximum=119)
            gender_input = gr.Dropdown(choices=GENDERS, label="Gender")
        with gr.Row():
            height_input = gr.Number(label="Height (cm)", minimum=1)
            weight_input = gr.Number(label="Weight (kg)", minimum=1)
        with gr.Row():
            goal_input = gr.Dropdown(choices=GOALS, label="Fitness Goal")
            level_input = gr.Dropdown(choices=LEVELS, label="Fitness Level")
        with gr.Row():
            location_input = gr.Dropdown(choices=LOCATIONS, label="Workout Location")
            diet_input = gr.Dropdown(choices=DIETS, label="Dietary Preference")

        generate_btn = gr.Button("⚡ Generate My Plan", variant="primary", size="lg")

    form_inputs = [
        name_input, age_input, gender_input, height_input, weight_input,
        goal_input, level_input, location_input, diet_input,
    ]

    # --- STEP 2: LOADING ---
    with gr.Column(visible=False, elem_classes="container") as loading_col:
        gr.Markdown("### 🧠 Crafting your personalized plan...")
        fact_display = gr.Markdown(fact_markdown(0))
        carousel_timer = gr.Timer(FACT_ROTATION_SECONDS, active=False)

    # --- STEP 3: RESULTS ---
    with gr.Column(visible=False, elem_classes="container") as results_col:
        quote_display = gr.Markdown(quote_markdown(0))

        with gr.Row():
            back_btn = gr.Button("🏠 Back to Home", variant="secondary")
            regenerate_btn = gr.Button("🔄 Regenerate")
            export_btn = gr.Button("📄 Export PDF", variant="primary")

        pdf_file = gr.File(label="Your PDF", visible=True, interactive=False)
        audio_player = gr.Audio(label="Now playing", type="filepath", autoplay=True, interactive=False)

        with gr.Row():
            with gr.Column(scale=3):
                with gr.Tabs():
                    for category in PlanCategory:
                        with gr.Tab(TAB_TITLES[category]):

                            @gr.render(inputs=[manager_state, render_tick], triggers=[render_tick.change])
                            def render_plan(manager, tick, category=category):
                                if manager is None or manager.plans is None:
                                    gr.Markdown("### Your personalized plan will appear here...")
                                    return
                                for block in manager.render(category):
                                    render_block(block)

            with gr.Column(scale=1):
                streak_display = gr.HTML()
                mark_done_btn = gr.Button("✅ I worked out today")
                gr.Markdown(suggested_reads_markdown())

    # ============================================================
    # 🧱 BLOCK RENDERING (called inside @gr.render)
    # ============================================================

    def render_block(block: RenderBlock):
        if block.kind == "spacer":
            return
        accent = f"accent-{block.accent}"

        if block.action == "listen":
            with gr.Row(elem_classes=["day-header", accent]):
                gr.Markdown(blocks_to_markdown([block]))
                if block.loading:
                    label = "Loading..."
                elif block.playing:
                    label = "⏹ Stop"
                else:
                    label = "🔊 Listen"
                listen_btn = gr.Button(label, size="sm", scale=0, min_width=90, interactive=not block.loading)

            async def on_listen(manager, tick, key=block.action_key, text=block.spoken_content):
                async for outputs in toggle_day_audio(manager, tick, key, text):
                    yield outputs

            listen_btn.click(
                fn=on_listen,
                inputs=[manager_state, render_tick],
                outputs=[manager_state, render_tick, audio_player],
            )
            return

        if block.action == "image":
            with gr.Column(elem_classes=[accent]):
                with gr.Row():
                    gr.Markdown(f"**{block.name}**\n\n{block.detail}")
                    image_btn = gr.Button(
                        "Gen..." if block.generating else "🖼 Image",
                        size="sm",
                        scale=0,
                        min_width=90,
                        interactive=not block.generating,
                    )
                if block.image_url:
                    gr.Image(value=block.image_url, label=f"{block.name} visualization", show_label=False, height=280)

            async def on_image(manager, tick, key=block.action_key, subject=block.image_prompt, image_type=block.image_type):
                async for outputs in request_image(manager, tick, key, subject, image_type):
                    yield outputs

            image_btn.click(
                fn=on_image,
                inputs=[manager_state, render_tick],
                outputs=[manager_state, render_tick],
                show_progress="minimal",
            )
            return

        gr.Markdown(blocks_to_markdown([block]), elem_classes=[accent] if block.kind != "paragraph" else None)

    # ============================================================
    # 🔗 WIRING
    # ============================================================

    view_outputs = [form_col, loading_col, results_col]

    generate_event = dict(
        fn=generate_plans,
        inputs=[manager_state, browser_store, render_tick, *form_inputs],
        outputs=[manager_state, browser_store, render_tick, carousel_timer, *view_outputs],
    )
    generate_btn.click(**generate_event)
    regenerate_btn.click(**generate_event)

    carousel_timer.tick(
        fn=lambda tick: (tick + 1, fact_markdown(tick + 1), quote_markdown(tick + 1)),
        inputs=[carousel_tick],
        outputs=[carousel_tick, fact_display, quote_display],
    )

    back_btn.click(
        fn=back_to_form,
        inputs=[manager_state, render_tick],
        outputs=[manager_state, render_tick, audio_player, *view_outputs],
    )

    export_btn.click(fn=export_pdf, inputs=[manager_state], outputs=[pdf_file])

    audio_player.stop(fn=on_audio_end, inputs=[manager_state, render_tick], outputs=[manager_state, render_tick])
    audio_player.pause(fn=on_player_halted, inputs=[manager_state, render_tick], outputs=[manager_state, render_tick])
    audio_player.clear(fn=on_player_halted, inputs=[manager_state, render_tick], outputs=[manager_state, render_tick])

    mark_done_btn.click(fn=mark_today_done, inputs=[browser_store], outputs=[browser_store, streak_display])

    demo.load(
        fn=restore_saved_plans,
        inputs=[manager_state, browser_store, render_tick],
        outputs=[manager_state, render_tick, *view_outputs, *form_inputs],
    ).then(fn=streak_html, inputs=[browser_store], outputs=[streak_display])
