# products/serializers/localized.py

from rest_framework import serializers

from products.services.i18n import DEFAULT_LOCALE, localized_value, resolve_locale


class LocalizedFieldsMixin:
    """
    Replaces `localized_fields` in the output with the request-locale value
    (EN column when filled, French base otherwise).
    """

    localized_fields: tuple = ()

    def _locale(self) -> str:
        locale = self.context.get("locale")
        if locale:
            return locale
        request = self.context.get("request")
        return resolve_locale(request) if request is not None else DEFAULT_LOCALE

    def to_representation(self, instance):
        data = super().to_representation(instance)
        locale = self._locale()
        for field in self.localized_fields:
            data[field] = localized_value(instance, field, locale)
        return data


def optional_min_length(value: str, minimum: int, label: str) -> str:
    """
    Blank is allowed; otherwise the trimmed text must reach `minimum`.
    """
    text = (value or "").strip()
    if text and len(text) < minimum:
        raise serializers.ValidationError(f"{label} must be at least {minimum} characters")
    return text
