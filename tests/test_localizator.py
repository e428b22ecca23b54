"""
Tests for utils/localizator.py

Tests cover:
- Lang parameter functionality (request-scoped language)
- Fallback to config.LANGUAGE
- Accept-Language style values
- Key parity between de and en
"""

import json

import pytest
from unittest.mock import patch

from enums.message_entity import MessageEntity
from utils.localizator import Localizator, L10N_DIR


class TestLocalizatorLangParameter:

    def test_get_text_with_lang_de(self):
        assert Localizator.get_text(MessageEntity.USER, "order_success_title", lang="de") == "Bestellung erfolgreich"

    def test_get_text_with_lang_en(self):
        assert Localizator.get_text(MessageEntity.USER, "order_success_title", lang="en") == "Order Successful"

    def test_seller_entity(self):
        assert Localizator.get_text(MessageEntity.SELLER, "image_required_title", lang="de") == "Bild erforderlich"

    def test_common_entity(self):
        assert Localizator.get_text(MessageEntity.COMMON, "error_title", lang="en") == "Error"


class TestResolveLanguage:

    @pytest.mark.parametrize("value,expected", [
        ("de", "de"),
        ("en-US,en;q=0.9", "en"),
        ("DE-at", "de"),
    ])
    def test_supported_values(self, value, expected):
        assert Localizator.resolve_language(value) == expected

    @pytest.mark.parametrize("value", [None, "", "fr-FR,fr;q=0.8"])
    def test_fallback_to_config(self, value):
        with patch('utils.localizator.config') as mock_config:
            mock_config.LANGUAGE = "de"
            assert Localizator.resolve_language(value) == "de"


class TestTranslations:

    def test_de_and_en_have_same_keys(self):
        with open(L10N_DIR / "de.json", encoding="utf-8") as f:
            de = json.load(f)
        with open(L10N_DIR / "en.json", encoding="utf-8") as f:
            en = json.load(f)

        assert de.keys() == en.keys()
        for section in de:
            assert de[section].keys() == en[section].keys(), section
