from app.report.formatting import display_number, display_text, format_inr


def test_format_inr_indian_grouping():
    assert format_inr(20000000) == "₹2,00,00,000"
    assert format_inr(80000) == "₹80,000"
    assert format_inr(100000) == "₹1,00,000"
    assert format_inr(999) == "₹999"
    assert format_inr(0) == "₹0"


def test_format_inr_decimals_and_strings():
    assert format_inr(1234.5) == "₹1,234.5"
    assert format_inr(1234.567) == "₹1,234.567"
    assert format_inr(1.23456) == "₹1.235"
    assert format_inr(2500.1) == "₹2,500.1"
    assert format_inr("2500000") == "₹25,00,000"
    assert format_inr(-1500) == "-₹1,500"


def test_format_inr_fallbacks():
    assert format_inr(None) == "₹0"
    assert format_inr("") == "₹0"
    assert format_inr("lots") == "₹0"
    assert format_inr(True) == "₹0"
    assert format_inr(float("nan")) == "₹0"


def test_display_text():
    assert display_text(None, "-") == "-"
    assert display_text("  ", "-") == "-"
    assert display_text(False, "-") == "-"
    assert display_text(0, "-") == "0"
    assert display_text(12.0) == "12"
    assert display_text(12.5) == "12.5"
    assert display_text("a<b") == "a&lt;b"


def test_display_number_defaults_to_zero():
    assert display_number(None) == "0"
    assert display_number(60) == "60"


def test_display_text_nested_values_use_placeholder():
    assert display_text({"x": None}, "-") == "-"
    assert display_text([1], "-") == "-"
    assert display_text([], "-") == "-"
    assert display_number({"pct": 60}) == "0"
