"""Per-browser chat state: sessions, messages and the in-flight stream.

Pure Python so the page code stays a thin rendering layer. One ChatState
lives per page instance; nothing is persisted server-side.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from docchat.i18n import DEFAULT_LOCALE, translate
from docchat.models.schemas import StreamEvent, Usage

TITLE_LENGTH = 30


class ChatMessage(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    content: str
    is_user: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    sources: list[str] | None = None
    usage: Usage | None = None
    file_name: str | None = None


class UploadedFile(BaseModel):
    filename: str
    original_name: str
    upload_time: datetime = Field(default_factory=datetime.now)


class ChatSession(BaseModel):
    """A conversation with its messages and the documents uploaded into it."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    last_active_at: datetime = Field(default_factory=datetime.now)
    uploaded_files: list[UploadedFile] = Field(default_factory=list)
    active_file: str | None = None

    def touch(self) -> None:
        self.last_active_at = datetime.now()


class ChatState:
    """Client-side chat sessions and streaming status.

    At most one answer streams at a time. While it streams, the session it
    belongs to cannot be switched away from or deleted.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self.locale = locale
        self.sessions: list[ChatSession] = []
        self.active_id: str = ""
        self.streaming_text: str = ""
        self.is_loading: bool = False
        self._stream_session_id: str | None = None
        self.new_session()

    @property
    def active(self) -> ChatSession:
        return self._get(self.active_id)

    def _get(self, session_id: str) -> ChatSession:
        for session in self.sessions:
            if session.id == session_id:
                return session
        raise KeyError(session_id)

    def sorted_sessions(self) -> list[ChatSession]:
        """Sessions, most recently active first."""
        return sorted(self.sessions, key=lambda s: s.last_active_at, reverse=True)

    def new_session(self) -> ChatSession:
        session = ChatSession(title=translate("chat.newChat", self.locale))
        self.sessions.insert(0, session)
        if not self.is_loading:
            self.active_id = session.id
        return session

    def start_chat(self) -> ChatSession | None:
        """Open a fresh session for the user. Returns None while an answer is streaming."""
        if self.is_loading:
            return None
        return self.new_session()

    def select(self, session_id: str) -> bool:
        """Make a session active. Returns False while an answer is streaming."""
        if self.is_loading:
            return False
        self._get(session_id)
        self.active_id = session_id
        return True

    def delete(self, session_id: str) -> bool:
        """Remove a session; the most recent remaining one becomes active."""
        if self.is_loading and session_id == self._stream_session_id:
            return False
        self.sessions = [s for s in self.sessions if s.id != session_id]
        if not self.sessions:
            self.new_session()
        elif session_id == self.active_id:
            self.active_id = self.sorted_sessions()[0].id
        return True

    def clear_active(self) -> None:
        session = self.active
        session.messages.clear()
        session.touch()
        if self._stream_session_id == session.id:
            self._reset_stream()

    def record_upload(self, filename: str, original_name: str) -> UploadedFile:
        """Attach an uploaded document to the active session's next messages."""
        uploaded = UploadedFile(filename=filename, original_name=original_name)
        session = self.active
        session.uploaded_files.append(uploaded)
        session.active_file = filename
        session.touch()
        return uploaded

    def detach_file(self) -> None:
        self.active.active_file = None

    def add_user_message(self, text: str) -> ChatMessage:
        """Append the user's message; the first one names the session."""
        session = self.active
        if not session.messages:
            title = text.strip().replace("\n", " ")
            if len(title) > TITLE_LENGTH:
                title = title[:TITLE_LENGTH].rstrip() + "..."
            session.title = title or session.title
        message = ChatMessage(content=text, is_user=True, file_name=session.active_file)
        session.messages.append(message)
        session.touch()
        return message

    def begin_stream(self) -> None:
        self.is_loading = True
        self.streaming_text = ""
        self._stream_session_id = self.active_id

    def _stream_session(self) -> ChatSession | None:
        if self._stream_session_id is None:
            return None
        try:
            return self._get(self._stream_session_id)
        except KeyError:
            return None

    def _reset_stream(self) -> None:
        self.is_loading = False
        self.streaming_text = ""
        self._stream_session_id = None

    def _append_answer(self, message: ChatMessage) -> None:
        session = self._stream_session()
        if session is not None:
            session.messages.append(message)
            session.touch()
        self._reset_stream()

    def apply_event(self, event: StreamEvent) -> bool:
        """Fold one stream event into the state.

        Returns:
            True when the stream is finished (last chunk or error).
        """
        if not self.is_loading:
            return True
        if event.error:
            self.fail()
            return True
        if event.chunk:
            self.streaming_text += event.chunk
        if event.is_last:
            self._append_answer(
                ChatMessage(
                    content=self.streaming_text,
                    is_user=False,
                    sources=event.sources,
                    usage=event.usage,
                )
            )
            return True
        return False

    def fail(self) -> None:
        """End the stream with the localized error message as the answer."""
        if not self.is_loading:
            return
        self._append_answer(
            ChatMessage(content=translate("chat.error", self.locale), is_user=False)
        )

    def end_stream(self) -> None:
        """Close a stream that stopped without a final event.

        Text received so far is kept as the answer; with no text at all the
        request counts as failed.
        """
        if not self.is_loading:
            return
        if self.streaming_text:
            self._append_answer(ChatMessage(content=self.streaming_text, is_user=False))
        else:
            self.fail()
