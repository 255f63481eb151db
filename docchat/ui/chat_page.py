"""NiceGUI chat interface with SSE streaming, sessions and document upload."""

import os

from fastapi import Request
from nicegui import app, events, ui

from docchat.i18n import translate
from docchat.models.schemas import ChatRequest, StreamEvent
from docchat.parsing import MAX_FILE_SIZE
from docchat.ui.api_client import ApiError, stream_chat_response, upload_document
from docchat.ui.auth_pages import page_locale, require_user, sign_out
from docchat.ui.state import ChatMessage, ChatState

THEME_KEY = "darkMode"

# Plain Enter sends; Shift+Enter inserts a newline
SEND_KEY_EVENT = "keydown.enter.exact.prevent"

CUSTOM_CSS = """
<style>
    .message-user { background: #3b82f6; color: white; border-radius: 18px 18px 4px 18px; }
    .message-assistant { background: #f3f4f6; color: #1f2937; border-radius: 18px 18px 18px 4px; }
    .body--dark .message-assistant { background: #374151; color: #f3f4f6; }
    .message-footer { border-top: 1px solid rgba(0, 0, 0, 0.15); }
    .session-item.active { background: rgba(59, 130, 246, 0.12); }
    .typing-dot {
        width: 8px; height: 8px; background: #3b82f6; border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }
    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


@ui.page("/")
async def chat_page(request: Request) -> None:
    """Main chat page."""
    user = require_user()
    if not user:
        return

    locale = page_locale(request)

    def t(key: str) -> str:
        return translate(key, locale)

    ui.add_head_html(CUSTOM_CSS)
    dark = ui.dark_mode(app.storage.user.get(THEME_KEY, False))
    state = ChatState(locale)
    streaming: dict[str, ui.markdown] = {}

    def toggle_theme() -> None:
        dark.toggle()
        app.storage.user[THEME_KEY] = dark.value

    def render_footer(msg: ChatMessage) -> None:
        if msg.sources:
            with ui.column().classes("message-footer mt-2 pt-2 gap-0"):
                ui.label(t("chat.sources")).classes("text-xs font-semibold")
                for source in msg.sources:
                    ui.label(f"• {source}").classes("text-xs truncate")
        if msg.usage and (msg.usage.tokens or msg.usage.cost):
            parts = []
            if msg.usage.tokens:
                parts.append(f"{msg.usage.tokens} {t('chat.tokens')}")
            if msg.usage.cost:
                parts.append(f"{t('chat.cost')}: {msg.usage.cost}")
            ui.label(f"{t('chat.usage')}: {', '.join(parts)}").classes(
                "message-footer mt-2 pt-2 text-xs"
            )

    def render_message(msg: ChatMessage) -> None:
        align = "justify-end" if msg.is_user else "justify-start"
        bubble = "message-user" if msg.is_user else "message-assistant"
        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes(f"max-w-[70%] px-4 py-3 gap-1 {bubble}"):
                if msg.is_user:
                    ui.label(msg.content).classes("whitespace-pre-wrap text-sm")
                    if msg.file_name:
                        ui.label(f"📎 {msg.file_name}").classes("text-[10px] opacity-80")
                else:
                    ui.markdown(msg.content).classes("text-sm")
                    render_footer(msg)
                ui.label(msg.timestamp.strftime("%H:%M")).classes("text-[10px] opacity-70")

    @ui.refreshable
    def messages_view() -> None:
        session = state.active
        if not session.messages and not state.is_loading:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label(t("chat.empty")).classes("text-lg text-gray-400")
            return
        for msg in session.messages:
            render_message(msg)
        if state.is_loading:
            with ui.row().classes("w-full justify-start"):
                with ui.column().classes("max-w-[70%] px-4 py-3 gap-1 message-assistant"):
                    if state.streaming_text:
                        streaming["label"] = ui.markdown(state.streaming_text).classes("text-sm")
                        ui.label(t("chat.loading")).classes("text-[10px] opacity-70")
                    else:
                        with ui.row().classes("items-center gap-2"):
                            for _ in range(3):
                                ui.element("div").classes("typing-dot")
                            ui.label(t("chat.loading")).classes("text-sm italic opacity-70")

    @ui.refreshable
    def sessions_view() -> None:
        for session in state.sorted_sessions():
            active = "active" if session.id == state.active_id else ""
            with ui.row().classes(
                f"session-item {active} w-full items-center justify-between "
                "px-3 py-2 rounded cursor-pointer no-wrap"
            ).on("click", lambda s=session: select_session(s.id)):
                ui.label(session.title).classes("text-sm truncate")
                ui.button(
                    icon="delete", on_click=lambda s=session: delete_session(s.id)
                ).props("flat round dense size=sm")

    @ui.refreshable
    def attachment_view() -> None:
        filename = state.active.active_file
        if filename:
            with ui.row().classes("items-center gap-1 text-xs text-gray-500"):
                ui.icon("attach_file")
                ui.label(f"{t('chat.attached')}: {filename}")
                ui.button(icon="close", on_click=detach).props("flat round dense size=xs")

    def refresh_all() -> None:
        messages_view.refresh()
        sessions_view.refresh()
        attachment_view.refresh()

    def select_session(session_id: str) -> None:
        if state.select(session_id):
            refresh_all()

    def delete_session(session_id: str) -> None:
        if state.delete(session_id):
            refresh_all()

    def new_chat() -> None:
        if state.start_chat() is not None:
            refresh_all()

    def clear_chat() -> None:
        state.clear_active()
        refresh_all()

    def detach() -> None:
        state.detach_file()
        attachment_view.refresh()

    async def send_message() -> None:
        text = (input_field.value or "").strip()
        if not text or state.is_loading:
            return

        input_field.value = ""
        message = state.add_user_message(text)
        state.begin_stream()
        send_btn.disable()
        new_chat_btn.disable()
        refresh_all()

        def on_event(event: StreamEvent) -> None:
            if state.apply_event(event):
                messages_view.refresh()
            elif "label" in streaming and not streaming["label"].is_deleted:
                streaming["label"].set_content(state.streaming_text)
            else:
                messages_view.refresh()

        def on_error(error: str) -> None:
            state.fail()
            messages_view.refresh()
            ui.notify(error, type="negative")

        chat_request = ChatRequest(
            chat_input=text,
            session_id=state.active_id,
            file_name=message.file_name,
        )
        try:
            await stream_chat_response(chat_request, on_event, on_error)
        finally:
            state.end_stream()
            streaming.clear()
            send_btn.enable()
            new_chat_btn.enable()
            refresh_all()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        try:
            result = await upload_document(
                content, e.file.name, e.file.content_type, state.active_id
            )
        except ApiError as err:
            ui.notify(f"{t('chat.uploadError')}: {err.message}", type="negative")
            return
        finally:
            uploader.reset()
        state.record_upload(result.filename, result.original_name)
        ui.notify(result.message, type="positive")
        refresh_all()

    # === Layout ===
    with ui.header().classes("items-center justify-between px-4 py-2 bg-blue-600"):
        with ui.row().classes("items-center gap-2"):
            ui.button(icon="menu", on_click=lambda: drawer.toggle()).props(
                "flat round color=white"
            )
            ui.icon("smart_toy").classes("text-white text-2xl")
            ui.label(t("chat.title")).classes("text-lg font-semibold text-white")
        with ui.row().classes("items-center gap-2"):
            ui.label(user.get("name", "")).classes("text-sm text-white/80")
            ui.button(icon="dark_mode", on_click=toggle_theme).props(
                "flat round color=white"
            ).tooltip(t("chat.theme"))
            ui.button(t("auth.logout"), on_click=sign_out).props("flat color=white")

    with ui.left_drawer(value=True).classes("p-3 gap-2") as drawer:
        new_chat_btn = ui.button(t("chat.newChat"), icon="add", on_click=new_chat).classes(
            "w-full"
        )
        sessions_view()

    with ui.column().classes("w-full max-w-4xl mx-auto gap-4 pb-40"):
        with ui.row().classes("w-full justify-end"):
            ui.button(t("chat.clearButton"), icon="delete_sweep", on_click=clear_chat).props(
                "flat dense"
            )
        messages_view()

    with ui.footer().classes("bg-white dark:bg-gray-900 border-t px-4 py-3"):
        with ui.column().classes("w-full max-w-4xl mx-auto gap-1"):
            attachment_view()
            with ui.row().classes("w-full items-end gap-2 no-wrap"):
                uploader = (
                    ui.upload(
                        on_upload=handle_upload,
                        auto_upload=True,
                        max_file_size=MAX_FILE_SIZE,
                    )
                    .props('accept=".pdf,.doc,.docx"')
                    .classes("hidden")
                )
                ui.button(
                    icon="attach_file", on_click=lambda: uploader.run_method("pickFiles")
                ).props("flat round").tooltip(t("chat.attach"))
                input_field = (
                    ui.textarea(placeholder=t("chat.inputPlaceholder"))
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on(SEND_KEY_EVENT, send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=primary"
                )


def main() -> None:
    from docchat.ui import auth_pages  # noqa: F401 - Registers the login pages

    ui.run(
        title="DocChat",
        port=int(os.getenv("UI_PORT", "8080")),
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "docchat-secret"),
    )


if __name__ == "__main__":
    main()
