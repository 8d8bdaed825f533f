# tests/test_i18n.py

from factory_ops.utils.i18n import SUPPORTED_LANGUAGES, TRANSLATIONS, Translator


def test_every_language_has_the_same_keys():
    keys = set(TRANSLATIONS["en"])
    for language in SUPPORTED_LANGUAGES:
        assert set(TRANSLATIONS[language]) == keys


def test_translate_and_fall_back_to_key():
    translator = Translator("en")

    assert translator.t("doc.approve") == "Approve"
    assert translator.t("no.such.key") == "no.such.key"


def test_unsupported_language_keeps_current():
    translator = Translator("cn")
    translator.set_language("fr")

    assert translator.language == "cn"
    assert translator.t("doc.approve") == "批准"
