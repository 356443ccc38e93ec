"""Environment file tables for generated projects.

Each table is an ordered list of (key, value) pairs. A value wrapped in braces
names a ProjectRequest parameter; anything else is written literally.
"""
from typing import Mapping, Sequence, Tuple

EnvTable = Sequence[Tuple[str, str]]

CAPTCHA_KEY = "0x4AAAAAAAIR3qJWMFMaFVXX"
COMMERCIAL_NAME = "ISI.INVOICE"
COMPANY_URL = "https://integrate.com.bo"

LOCAL_ENV: EnvTable = (
    ("APP_ENV", "{app_env}"),
    ("ISI_BASE_URL", "http://localhost:3002"),
    ("ISI_API_URL", "{api_url}"),
    ("ISI_DOCUMENTO_SECTOR", "{documento_sector}"),
    ("ISI_CAPTCHA_KEY", CAPTCHA_KEY),
    ("ISI_ASSETS_URL", "/assets/images/integrate"),
    ("ISI_FONDO", "/assets/images/integrate/fondo-login.jpg"),
    ("ISI_LOGO_FULL", "/assets/images/integrate/logo.png"),
    ("ISI_LOGO_MINI", "/assets/images/integrate/logo-mini.png"),
    ("ISI_NOMBRE_COMERCIAL", COMMERCIAL_NAME),
    ("ISI_URL", COMPANY_URL),
    ("ISI_FAVICON", "/assets/images/integrate/favicon.ico"),
    ("ISI_THEME", "blue"),
)

PRODUCTION_ENV: EnvTable = (
    ("APP_ENV", "production"),
    ("ISI_BASE_URL", "dev.adm.isipass.com.bo"),
    ("ISI_API_URL", "https://sandbox.isipass.net/api"),
    ("ISI_ASSETS_URL", "/assets/integrate"),
    ("ISI_FONDO", "/assets/integrate/fondo-login.jpg"),
    ("ISI_LOGO_FULL", "/assets/integrate/logo.png"),
    ("ISI_LOGO_MINI", "/assets/integrate/logo-mini.png"),
    ("ISI_NOMBRE_COMERCIAL", COMMERCIAL_NAME),
    ("ISI_URL", COMPANY_URL),
    ("ISI_FAVICON", "/assets/integrate/favicon.ico"),
    ("ISI_THEME", "blue1"),
    ("ISI_DOCUMENTO_SECTOR", "{documento_sector}"),
    ("ISI_CAPTCHA_KEY", CAPTCHA_KEY),
)


def _resolve(value: str, parameters: Mapping[str, str]) -> str:
    if value.startswith("{") and value.endswith("}"):
        name = value[1:-1]
        if name not in parameters:
            raise KeyError(f"Missing parameter for environment file: {name}")
        return str(parameters[name])
    return value


def render_env(table: EnvTable, parameters: Mapping[str, str]) -> str:
    """Render a table as KEY=value lines with a trailing newline."""
    lines = [f"{key}={_resolve(value, parameters)}" for key, value in table]
    return "\n".join(lines) + "\n"
