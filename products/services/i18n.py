"""
PATH: products/services/i18n.py

LOCALE RESOLUTION + FIELD FALLBACK

- Request locale: ?locale= -> Accept-Language primary tag -> "fr"
- localized_value(obj, "name", "en") reads name_en when it holds text,
  otherwise the French base column, otherwise "".
"""

from __future__ import annotations

DEFAULT_LOCALE = "fr"
SUPPORTED_LOCALES = ("fr", "en")


def normalize_locale(raw) -> str | None:
    tag = (raw or "").strip().lower()
    if not tag:
        return None
    primary = tag.split(",")[0].split(";")[0].strip().split("-")[0].split("_")[0]
    return primary if primary in SUPPORTED_LOCALES else None


def resolve_locale(request) -> str:
    if request is None:
        return DEFAULT_LOCALE

    params = getattr(request, "query_params", None) or getattr(request, "GET", {})
    from_param = normalize_locale(params.get("locale"))
    if from_param:
        return from_param

    from_header = normalize_locale(request.META.get("HTTP_ACCEPT_LANGUAGE"))
    return from_header or DEFAULT_LOCALE


def localized_value(obj, field: str, locale: str) -> str:
    if locale != DEFAULT_LOCALE:
        translated = getattr(obj, f"{field}_{locale}", None)
        if translated and str(translated).strip():
            return translated

    return getattr(obj, field, None) or ""
