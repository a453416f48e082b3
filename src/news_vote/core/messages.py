"""Localized user-facing messages keyed by error code."""

from __future__ import annotations

from news_vote.core.settings import settings

SUPPORTED_LOCALES = ("ja", "en")

MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        "unauthorized": "認証に失敗しました。ログインしてください。",
        "forbidden": "この操作を行う権限がありません。",
        "not_found": "指定されたデータが見つかりません。",
        "invalid_state": "現在この操作は行えません。",
        "conflict": "この記事にはすでに投票済みです。",
        "validation_error": "入力内容を確認してください。",
        "limit_exceeded": "紹介によるポイント獲得は5回までとなっています。",
        "transient": "ネットワークエラーが発生しました。もう一度お試しください。",
        "error": "エラーが発生しました。",
    },
    "en": {
        "unauthorized": "Authentication failed. Please sign in.",
        "forbidden": "You are not allowed to perform this action.",
        "not_found": "The requested item could not be found.",
        "invalid_state": "This action is not available right now.",
        "conflict": "You have already voted on this article.",
        "validation_error": "Please check your input.",
        "limit_exceeded": "Referral rewards are limited to 5 per account.",
        "transient": "A network error occurred. Please try again.",
        "error": "An error occurred.",
    },
}


def resolve_locale(accept_language: str | None) -> str:
    """Pick a supported locale from an ``Accept-Language`` header value."""
    if accept_language:
        for part in accept_language.split(","):
            tag = part.split(";", 1)[0].strip().lower()
            primary = tag.split("-", 1)[0]
            if primary in SUPPORTED_LOCALES:
                return primary
    if settings.default_locale in SUPPORTED_LOCALES:
        return settings.default_locale
    return SUPPORTED_LOCALES[0]


def message_for(code: str, locale: str) -> str:
    """Return the localized message for ``code``, falling back to the generic one."""
    catalog = MESSAGES.get(locale, MESSAGES[SUPPORTED_LOCALES[0]])
    return catalog.get(code, catalog["error"])
