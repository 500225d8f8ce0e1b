"""NiceGUI chat and history views sharing one ChatState."""

import logging
import os
from datetime import datetime
from typing import Any

from nicegui import ui

from src.chat.history import HistoryService
from src.chat.orchestrator import EmptyInputError, TurnOrchestrator
from src.chat.state import ChatEvent, ChatState
from src.completion.client import DeferredCompletionClient
from src.models.schemas import ChatMessage, MessageKind
from src.store.errors import StorePersistError
from src.ui.api_client import ChatApiClient

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: linear-gradient(135deg, #eff6ff 0%, #dbeafe 100%); min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .message-question {
        background: #3b82f6;
        color: white;
        border-radius: 12px 12px 0 12px;
    }

    .message-answer {
        background: #e5e7eb;
        color: #1f2937;
        border-radius: 12px 12px 12px 0;
    }

    .history-question { background: #eff6ff; border-left: 4px solid #60a5fa; }
    .history-answer { background: #f3f4f6; border-left: 4px solid #9ca3af; }

    .message-answer pre { margin: 0.5rem 0; }
    .message-answer code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


def format_timestamp(value: datetime) -> str:
    return value.strftime("%b %d, %Y %I:%M %p")


@ui.page("/")
def chat_page() -> None:
    """Main page: chat view and history view."""
    ui.add_head_html(CUSTOM_CSS)

    state = ChatState()
    store = ChatApiClient()
    orchestrator = TurnOrchestrator(store, DeferredCompletionClient(), state)
    history = HistoryService(store, state)
    generating = False

    input_field: ui.textarea
    send_btn: ui.button

    def render_bubble(msg: ChatMessage) -> None:
        is_question = msg.kind == MessageKind.QUESTION
        align = "justify-end" if is_question else "justify-start"
        bubble = "message-question" if is_question else "message-answer"

        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"px-3 py-2 max-w-[70%] shadow text-sm {bubble}"):
                ui.markdown(msg.content)

    @ui.refreshable
    def chat_view() -> None:
        if not state.session and not generating:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label("Ask anything to start a conversation").classes("text-lg text-gray-400")
            return
        for msg in state.session:
            render_bubble(msg)
        if generating:
            with ui.row().classes("w-full justify-start"):
                ui.label("Thinking...").classes(
                    "message-answer px-3 py-2 text-sm animate-pulse"
                )

    @ui.refreshable
    def history_view() -> None:
        count = len(state.history)
        with ui.row().classes("w-full items-center justify-between"):
            with ui.column().classes("gap-0"):
                ui.label("Chat History").classes("text-2xl font-semibold text-blue-600")
                ui.label(f"{count} message{'' if count == 1 else 's'} in history").classes(
                    "text-sm text-gray-500"
                )
            if state.history:
                ui.button("Clear All", on_click=clear_all).props(
                    "outline color=negative size=sm"
                )

        if not state.history:
            with ui.column().classes("w-full items-center py-8"):
                ui.label("No history yet.").classes("text-lg text-gray-500")
                ui.label("Start a conversation to see your chat history here.").classes(
                    "text-sm text-gray-400"
                )
            return

        for msg in state.history:
            css = "history-question" if msg.kind == MessageKind.QUESTION else "history-answer"
            with ui.row().classes(f"w-full p-3 rounded shadow items-start no-wrap {css}"):
                with ui.column().classes("flex-grow gap-1"):
                    who = "You" if msg.kind == MessageKind.QUESTION else "AI"
                    ui.label(who).classes("text-xs text-gray-500 font-medium")
                    ui.label(msg.content).classes("text-sm break-words")
                    ui.label(format_timestamp(msg.created_at)).classes("text-xs text-gray-400")
                if msg.id is not None:
                    ui.button(
                        icon="close",
                        on_click=lambda _, message_id=msg.id: delete_message(message_id),
                    ).props("flat round dense size=sm color=grey").tooltip("Delete message")

    def on_event(event: ChatEvent, payload: Any) -> None:
        if event in (ChatEvent.TURN_SUBMITTED, ChatEvent.TURN_COMPLETED):
            chat_view.refresh()
        if event != ChatEvent.TURN_SUBMITTED:
            history_view.refresh()

    state.subscribe(on_event)

    async def send_message() -> None:
        nonlocal generating
        text = input_field.value or ""
        if generating:
            return

        try:
            generating = True
            send_btn.disable()
            input_field.value = ""
            result = await orchestrator.submit_turn(text)
        except EmptyInputError:
            return
        finally:
            generating = False
            send_btn.enable()
            chat_view.refresh()

        if result.completion_failed:
            ui.notify("The assistant could not answer", type="warning")

    async def load_history() -> None:
        try:
            await history.list_history()
        except StorePersistError as e:
            logger.error(f"Failed to load history: {e}")
            ui.notify(f"Failed to load history: {e}", type="negative")

    async def delete_message(message_id: int) -> None:
        try:
            await history.delete_message(message_id)
        except StorePersistError as e:
            logger.error(f"Failed to delete chat: {e}")
            ui.notify(f"Failed to delete chat: {e}", type="negative")

    async def clear_all() -> None:
        try:
            await history.clear_history()
        except StorePersistError as e:
            logger.error(f"Failed to clear chats: {e}")
            ui.notify(f"Failed to clear chats: {e}", type="negative")

    def new_chat() -> None:
        state.clear_session()
        chat_view.refresh()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-4xl mx-auto p-4 gap-4"):
        # Header
        with ui.row().classes("w-full app-container px-5 py-3 items-center justify-between"):
            ui.label("Chat AI").classes("text-xl font-bold text-blue-600")
            with ui.tabs() as tabs:
                chat_tab = ui.tab("Chat", icon="chat")
                history_tab = ui.tab("History", icon="history")

        with ui.tab_panels(tabs, value=chat_tab).classes("w-full app-container"):
            with ui.tab_panel(chat_tab):
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label("New Chat").classes("text-3xl font-bold text-blue-600")
                    ui.button(icon="add", on_click=new_chat).props("flat round color=primary")

                with ui.scroll_area().classes("w-full h-[60vh]"):
                    with ui.column().classes("w-full gap-2"):
                        chat_view()

                with ui.row().classes("w-full gap-2 items-end no-wrap"):
                    input_field = (
                        ui.textarea(placeholder="Ask anything...")
                        .props("outlined autogrow dense rows=2")
                        .classes("flex-grow")
                        .on("keydown.enter.prevent", send_message)
                    )
                    send_btn = ui.button("Send", on_click=send_message).props("unelevated")

            with ui.tab_panel(history_tab):
                with ui.column().classes("w-full gap-3"):
                    history_view()

    async def on_tab_change(e: Any) -> None:
        if e.value in (history_tab, "History"):
            await load_history()

    tabs.on_value_change(on_tab_change)
    ui.timer(0.1, load_history, once=True)


def main() -> None:
    ui.run(title="Chat AI", port=int(os.getenv("UI_PORT", "8080")), reload=False)


if __name__ == "__main__":
    main()
