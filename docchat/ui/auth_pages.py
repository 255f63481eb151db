"""NiceGUI login and registration pages."""

from fastapi import Request
from nicegui import app, ui

from docchat.api.middleware import AUTH_COOKIE
from docchat.i18n import LOCALE_COOKIE, negotiate_locale, translate
from docchat.ui.api_client import ApiError, login, register

USER_KEY = "chatUser"

AUTH_CSS = """
<style>
    body { background: #f9fafb; }
    .auth-card { width: 100%; max-width: 24rem; border-radius: 12px; }
</style>
"""


def page_locale(request: Request) -> str:
    return negotiate_locale(
        request.headers.get("accept-language"), request.cookies.get(LOCALE_COOKIE)
    )


def current_user() -> dict | None:
    return app.storage.user.get(USER_KEY)


def require_user() -> dict | None:
    """Return the signed-in user, or sign out and head to the login page.

    The route-guard cookie can outlive browser storage. Clearing it here keeps
    the guard from bouncing /login back to a page that has no user.
    """
    user = current_user()
    if not user:
        sign_out()
    return user


def sign_in(user: dict) -> None:
    """Remember the user in browser storage and set the route-guard cookie."""
    app.storage.user[USER_KEY] = user
    ui.run_javascript(
        f"document.cookie = '{AUTH_COOKIE}={user['id']}; path=/; SameSite=Lax';"
    )
    ui.navigate.to("/")


def sign_out() -> None:
    app.storage.user.pop(USER_KEY, None)
    ui.run_javascript(
        f"document.cookie = '{AUTH_COOKIE}=; path=/; expires=Thu, 01 Jan 1970 00:00:00 GMT';"
    )
    ui.navigate.to("/login")


@ui.page("/login")
def login_page(request: Request) -> None:
    """Email/password sign-in form."""
    locale = page_locale(request)
    ui.add_head_html(AUTH_CSS)

    async def submit() -> None:
        error_label.set_text("")
        if not email.value or not password.value:
            error_label.set_text(translate("auth.failed", locale))
            return
        submit_btn.disable()
        try:
            user = await login(email.value.strip(), password.value)
        except ApiError as e:
            error_label.set_text(e.message)
            return
        finally:
            submit_btn.enable()
        sign_in(user.model_dump())

    with ui.column().classes("w-full min-h-screen items-center justify-center"):
        with ui.card().classes("auth-card p-6 gap-4"):
            ui.label(translate("auth.loginTitle", locale)).classes("text-2xl font-bold")
            email = ui.input(translate("auth.email", locale)).props("type=email outlined").classes(
                "w-full"
            )
            password = (
                ui.input(translate("auth.password", locale), password=True)
                .props("outlined")
                .classes("w-full")
                .on("keydown.enter", submit)
            )
            error_label = ui.label("").classes("text-sm text-red-600")
            submit_btn = ui.button(translate("auth.loginButton", locale), on_click=submit).classes(
                "w-full"
            )
            ui.link(translate("auth.toRegister", locale), "/register").classes("text-sm")


@ui.page("/register")
def register_page(request: Request) -> None:
    """Account creation form; signs the new user in on success."""
    locale = page_locale(request)
    ui.add_head_html(AUTH_CSS)

    async def submit() -> None:
        error_label.set_text("")
        submit_btn.disable()
        try:
            user = await register(name.value.strip(), email.value.strip(), password.value)
        except ApiError as e:
            error_label.set_text(e.message)
            return
        finally:
            submit_btn.enable()
        sign_in(user.model_dump())

    with ui.column().classes("w-full min-h-screen items-center justify-center"):
        with ui.card().classes("auth-card p-6 gap-4"):
            ui.label(translate("auth.registerTitle", locale)).classes("text-2xl font-bold")
            name = ui.input(translate("auth.name", locale)).props("outlined").classes("w-full")
            email = ui.input(translate("auth.email", locale)).props("type=email outlined").classes(
                "w-full"
            )
            password = (
                ui.input(translate("auth.password", locale), password=True)
                .props("outlined")
                .classes("w-full")
            )
            error_label = ui.label("").classes("text-sm text-red-600")
            submit_btn = ui.button(
                translate("auth.registerButton", locale), on_click=submit
            ).classes("w-full")
            ui.link(translate("auth.toLogin", locale), "/login").classes("text-sm")
