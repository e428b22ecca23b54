import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

import config
from enums.message_entity import MessageEntity

L10N_DIR = Path(__file__).resolve().parent.parent / "l10n"


class Localizator:
    SUPPORTED_LANGUAGES = ("de", "en")

    @staticmethod
    @lru_cache(maxsize=None)
    def _load(language: str) -> dict:
        with open(L10N_DIR / f"{language}.json", "r", encoding="UTF-8") as f:
            return json.loads(f.read())

    @staticmethod
    def resolve_language(lang: Optional[str] = None) -> str:
        """
        Pick the request language, falling back to config.LANGUAGE for
        missing or unsupported values (e.g. a raw Accept-Language header).
        """
        if lang:
            lang = lang.split(",")[0].split("-")[0].strip().lower()
            if lang in Localizator.SUPPORTED_LANGUAGES:
                return lang
        return config.LANGUAGE

    @staticmethod
    def get_text(entity: MessageEntity, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Entity type (USER, SELLER, COMMON)
            key: Localization key
            lang: Optional language code (e.g., "de", "en").
                  If None, uses config.LANGUAGE (default).
                  Pass it from request context in API routes
                  to avoid global state race conditions.

        Returns:
            Localized text string
        """
        data = Localizator._load(Localizator.resolve_language(lang))
        if entity == MessageEntity.SELLER:
            return data["seller"][key]
        elif entity == MessageEntity.USER:
            return data["user"][key]
        else:
            return data["common"][key]
