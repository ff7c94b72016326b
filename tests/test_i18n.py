"""Tests for i18n translations"""
import pytest

from cartstore import CartErrorKind
from cartstore.i18n import SUPPORTED_LANGUAGES, detect_language, get_text


@pytest.mark.parametrize("kind", list(CartErrorKind))
def test_every_error_kind_has_a_message_in_all_languages(kind):
    for lang in SUPPORTED_LANGUAGES:
        text = get_text(kind.message_key, lang)
        assert text != kind.message_key
        assert len(text) > 0


def test_original_portuguese_messages():
    assert get_text("cart.out_of_stock_on_add", "pt") == "Quantidade solicitada fora de estoque"
    assert get_text("cart.set_amount_failed", "pt") == "Erro na alteração de quantidade do produto"


def test_unknown_language_falls_back_to_english():
    assert get_text("cart.add_failed", "xx") == get_text("cart.add_failed", "en")


def test_missing_key_returns_default_or_key():
    assert get_text("cart.nope", "en") == "cart.nope"
    assert get_text("cart.nope", "en", default="fallback") == "fallback"


def test_partial_key_is_not_text():
    assert get_text("cart", "en") == "cart"


@pytest.mark.parametrize("code,expected", [("pt-BR", "pt"), ("ru_RU", "ru"), ("EN", "en"), (None, "en"), ("de", "en")])
def test_detect_language(code, expected):
    assert detect_language(code) == expected
