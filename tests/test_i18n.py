from exorate.i18n import t


def test_known_key_in_each_language():
    assert t("btn_submit", "en") == "Submit Ratings"
    assert t("btn_submit", "ko") == "평가 제출"


def test_unknown_language_falls_back_to_english():
    assert t("btn_submit", "fr") == "Submit Ratings"


def test_unknown_key_returns_key():
    assert t("no_such_key", "en") == "no_such_key"


def test_formatting_arguments():
    assert t("card_stats", "en", average=7.5, count=2) == "⭐️ Avg: 7.50 (2 ratings)"
