"""NiceGUI chat interface with streamed replies."""

from nicegui import ui

from chat_relay.client.conversation import Conversation
from chat_relay.client.transport import TransportClient
from chat_relay.models.schemas import Role, Turn

SYSTEM_PROMPT = (
    "You are a helpful, concise AI assistant. "
    "Keep responses clear and prefer bullet points when appropriate."
)

# Plain Enter inserts a newline; Ctrl/Cmd + Enter sends
SEND_KEY_EVENTS = ("keydown.ctrl.enter.prevent", "keydown.meta.enter.prevent")

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #0f172a; min-height: 100vh; color: #e2e8f0; }

    .app-container {
        background: rgba(255, 255, 255, 0.05);
        border: 1px solid rgba(255, 255, 255, 0.1);
        border-radius: 24px;
        overflow: hidden;
    }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: rgba(255, 255, 255, 0.05);
        border: 1px solid rgba(255, 255, 255, 0.1);
        border-radius: 18px 18px 18px 4px;
    }

    .badge-ready { border: 1px solid #34d399; color: #6ee7b7; }
    .badge-offline { border: 1px solid #fb7185; color: #fda4af; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    conversation = Conversation()
    client = TransportClient()

    messages_container: ui.column
    status_badge: ui.label
    typing_label: ui.label
    input_field: ui.textarea
    send_btn: ui.button
    stop_btn: ui.button

    def render_message(turn: Turn) -> ui.markdown:
        is_user = turn.role == Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with (
            ui.row().classes(f"w-full {align}"),
            ui.element("div").classes(f"max-w-[70%] px-4 py-3 {bubble}"),
        ):
            return ui.markdown(turn.content).classes("text-sm leading-relaxed")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for turn in conversation:
                render_message(turn)

    def set_loading(loading: bool) -> None:
        send_btn.set_visibility(not loading)
        stop_btn.set_visibility(loading)
        typing_label.set_visibility(loading)

    async def update_status() -> None:
        ready = await client.check_health()
        status_badge.set_text("Ready" if ready else "Offline")
        status_badge.classes(
            add="badge-ready" if ready else "badge-offline",
            remove="badge-offline" if ready else "badge-ready",
        )

    async def send_message() -> None:
        text = (input_field.value or "").strip()
        if not text or client.loading:
            return

        input_field.value = ""
        conversation.add_user(text)
        refresh_messages()
        set_loading(True)

        reply_view: ui.markdown | None = None

        def on_update(content: str) -> None:
            nonlocal reply_view
            if reply_view is None:
                with messages_container:
                    reply_view = render_message(Turn(role=Role.ASSISTANT, content=content))
            else:
                reply_view.set_content(content)

        try:
            await client.stream_reply(conversation, SYSTEM_PROMPT, on_update)
        finally:
            set_loading(False)
            refresh_messages()

    def stop() -> None:
        client.stop()

    def reset() -> None:
        client.stop()
        conversation.reset()
        refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full px-5 py-4 items-center justify-between border-b"):
            with ui.column().classes("gap-0"):
                ui.label("AI Chat").classes("text-lg font-semibold")
                ui.label("Streaming via OpenAI Responses API").classes("text-xs text-slate-400")
            with ui.row().classes("items-center gap-2"):
                status_badge = ui.label("...").classes("px-2 py-1 rounded-full text-xs")
                ui.button("Reset", on_click=reset).props("flat dense no-caps")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()
            typing_label = ui.label("Assistant is typing…").classes(
                "text-xs text-slate-400 animate-pulse pl-2"
            )

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end border-t"):
            input_field = (
                ui.textarea(placeholder="Ask me anything…")
                .props("autogrow dense rows=1 dark")
                .classes("flex-grow")
            )
            for event in SEND_KEY_EVENTS:
                input_field.on(event, send_message)
            send_btn = ui.button("Send", on_click=send_message).props("unelevated no-caps")
            stop_btn = ui.button("Stop", on_click=stop).props("unelevated no-caps color=negative")

        ui.label("Tip: Press Ctrl/⌘ + Enter to send.").classes(
            "text-[11px] text-slate-400 px-4 pb-3"
        )

    set_loading(False)
    ui.timer(0.1, update_status, once=True)
