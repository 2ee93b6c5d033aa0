from report_api.core.utils import split_report
from report_api.prompts import RESULT_SPLIT_SEPARATOR


def test_split_on_separator_trims_both_parts():
    parts = split_report("Rapport...\n--- Synthèse de marché ---\nMarché en hausse.")

    assert parts.report == "Rapport..."
    assert parts.market_summary == "Marché en hausse."


def test_missing_separator_keeps_everything_in_report():
    parts = split_report("  Rapport complet sans synthèse.\n")

    assert parts.report == "Rapport complet sans synthèse."
    assert parts.market_summary == ""


def test_only_first_separator_splits():
    # A second marker in the model output stays inside the market summary.
    text = f"A\n{RESULT_SPLIT_SEPARATOR}\nB\n{RESULT_SPLIT_SEPARATOR}\nC"

    parts = split_report(text)

    assert parts.report == "A"
    assert parts.market_summary == f"B\n{RESULT_SPLIT_SEPARATOR}\nC"


def test_separator_at_edges():
    assert split_report(f"{RESULT_SPLIT_SEPARATOR}\nMarché").report == ""
    assert split_report(f"Rapport\n{RESULT_SPLIT_SEPARATOR}").market_summary == ""


def test_empty_text():
    parts = split_report("")
    assert (parts.report, parts.market_summary) == ("", "")
