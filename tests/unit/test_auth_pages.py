"""Unit tests for browser sign-in state helpers.

NiceGUI's ``app`` and ``ui`` are patched out, so no client connection is needed.
"""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from docchat.ui import auth_pages, chat_page


@pytest.fixture
def nicegui() -> Iterator[tuple[MagicMock, MagicMock]]:
    with (
        patch.object(auth_pages, "app") as mock_app,
        patch.object(auth_pages, "ui") as mock_ui,
    ):
        mock_app.storage.user = {}
        yield mock_app, mock_ui


class TestRequireUser:
    def test_returns_stored_user(self, nicegui: tuple[MagicMock, MagicMock]) -> None:
        mock_app, mock_ui = nicegui
        mock_app.storage.user[auth_pages.USER_KEY] = {"id": "u1", "name": "Ana"}

        assert auth_pages.require_user() == {"id": "u1", "name": "Ana"}
        mock_ui.navigate.to.assert_not_called()
        mock_ui.run_javascript.assert_not_called()

    def test_stale_cookie_is_cleared(self, nicegui: tuple[MagicMock, MagicMock]) -> None:
        """With the guard cookie set but no stored user, the cookie is expired before leaving."""
        _, mock_ui = nicegui

        assert auth_pages.require_user() is None

        script = mock_ui.run_javascript.call_args.args[0]
        assert f"{auth_pages.AUTH_COOKIE}=;" in script
        assert "expires=Thu, 01 Jan 1970" in script
        mock_ui.navigate.to.assert_called_once_with("/login")


class TestSignInOut:
    def test_sign_in_sets_cookie_and_storage(self, nicegui: tuple[MagicMock, MagicMock]) -> None:
        mock_app, mock_ui = nicegui

        auth_pages.sign_in({"id": "u1", "name": "Ana"})

        assert mock_app.storage.user[auth_pages.USER_KEY]["id"] == "u1"
        assert f"{auth_pages.AUTH_COOKIE}=u1;" in mock_ui.run_javascript.call_args.args[0]
        mock_ui.navigate.to.assert_called_once_with("/")

    def test_sign_out_forgets_user(self, nicegui: tuple[MagicMock, MagicMock]) -> None:
        mock_app, mock_ui = nicegui
        mock_app.storage.user[auth_pages.USER_KEY] = {"id": "u1"}

        auth_pages.sign_out()

        assert auth_pages.USER_KEY not in mock_app.storage.user
        mock_ui.navigate.to.assert_called_once_with("/login")


class TestChatKeyBinding:
    def test_enter_sends_only_without_modifiers(self) -> None:
        """Shift+Enter must reach the textarea as a newline."""
        event, key, *modifiers = chat_page.SEND_KEY_EVENT.split(".")

        assert (event, key) == ("keydown", "enter")
        assert "exact" in modifiers
        assert "prevent" in modifiers
        assert "shift" not in modifiers
