"""Locale negotiation and message catalogs.

Spanish is the default locale; English is available for browsers that ask
for it. Keys are dotted ``namespace.name`` strings.
"""

SUPPORTED_LOCALES = ("es", "en")
DEFAULT_LOCALE = "es"
LOCALE_COOKIE = "locale"

MESSAGES: dict[str, dict[str, str]] = {
    "es": {
        "chat.title": "Chat IA",
        "chat.clearButton": "Limpiar chat",
        "chat.sendButton": "Enviar",
        "chat.inputPlaceholder": "Escribe tu mensaje...",
        "chat.loading": "Cargando...",
        "chat.error": "Error al procesar la solicitud",
        "chat.sources": "Fuentes:",
        "chat.usage": "Uso",
        "chat.tokens": "tokens",
        "chat.cost": "Costo",
        "chat.newChat": "Nuevo chat",
        "chat.empty": "Inicia una conversación",
        "chat.attach": "Adjuntar documento",
        "chat.attached": "Documento adjunto",
        "chat.uploadSuccess": (
            "¡Archivo subido exitosamente! Ahora puedes hacer preguntas sobre este documento."
        ),
        "chat.uploadError": "No se pudo subir el archivo",
        "chat.theme": "Cambiar tema",
        "auth.loginTitle": "Iniciar sesión",
        "auth.registerTitle": "Crear cuenta",
        "auth.name": "Nombre",
        "auth.email": "Correo electrónico",
        "auth.password": "Contraseña",
        "auth.loginButton": "Entrar",
        "auth.registerButton": "Registrarse",
        "auth.toRegister": "¿No tienes cuenta? Regístrate",
        "auth.toLogin": "¿Ya tienes cuenta? Inicia sesión",
        "auth.logout": "Cerrar sesión",
        "auth.failed": "Credenciales inválidas",
    },
    "en": {
        "chat.title": "AI Chat",
        "chat.clearButton": "Clear chat",
        "chat.sendButton": "Send",
        "chat.inputPlaceholder": "Type your message...",
        "chat.loading": "Loading...",
        "chat.error": "Error processing the request",
        "chat.sources": "Sources:",
        "chat.usage": "Usage",
        "chat.tokens": "tokens",
        "chat.cost": "Cost",
        "chat.newChat": "New chat",
        "chat.empty": "Start a conversation",
        "chat.attach": "Attach document",
        "chat.attached": "Attached document",
        "chat.uploadSuccess": (
            "File uploaded successfully! You can now ask questions about this document."
        ),
        "chat.uploadError": "The file could not be uploaded",
        "chat.theme": "Toggle theme",
        "auth.loginTitle": "Sign in",
        "auth.registerTitle": "Create account",
        "auth.name": "Name",
        "auth.email": "Email",
        "auth.password": "Password",
        "auth.loginButton": "Sign in",
        "auth.registerButton": "Register",
        "auth.toRegister": "No account? Register",
        "auth.toLogin": "Already registered? Sign in",
        "auth.logout": "Sign out",
        "auth.failed": "Invalid credentials",
    },
}


def _parse_accept_language(header: str) -> list[str]:
    """Return language tags from an Accept-Language header, best first."""
    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        piece = part.strip()
        if not piece:
            continue
        tag, _, params = piece.partition(";")
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        if quality > 0:
            weighted.append((-quality, index, tag.strip().lower()))
    return [tag for _, _, tag in sorted(weighted)]


def negotiate_locale(accept_language: str | None = None, cookie: str | None = None) -> str:
    """Pick the locale for a request.

    An explicit locale cookie wins, then the Accept-Language preferences
    (matching on the primary subtag), then DEFAULT_LOCALE.
    """
    if cookie and cookie in SUPPORTED_LOCALES:
        return cookie
    for tag in _parse_accept_language(accept_language or ""):
        primary = tag.split("-")[0]
        if primary in SUPPORTED_LOCALES:
            return primary
    return DEFAULT_LOCALE


def translate(key: str, locale: str = DEFAULT_LOCALE) -> str:
    """Look up a message, falling back to the default locale, then the key."""
    catalog = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    if key in catalog:
        return catalog[key]
    return MESSAGES[DEFAULT_LOCALE].get(key, key)
