import pytest

from src.formatting import config as formatting_config
from src.formatting.medicinal import build_medicinal_stages, process_medicinal_text
from src.models.citation import BookCitation
from src.models.rating import RatingRule

LAD = "The Complete Book of Ayurvedic Home Remedies, Vasant Lad (Page 42)"


def test_empty_and_none():
    assert process_medicinal_text("") == ""
    assert process_medicinal_text(None) == ""


def test_expand_lad():
    assert LAD in process_medicinal_text("Lad, p. 42", True)


def test_expand_lad_flexible_spacing_and_case():
    assert process_medicinal_text("lad,p.42") == LAD


def test_expand_ccras():
    assert process_medicinal_text("CCRAS, p. 7") == "CCRA, Ministry of Health (Page 7)"


def test_books_not_expanded_when_disabled():
    out = process_medicinal_text("Lad, p. 42", expand_books=False)
    assert "Lad, p. 42" in out
    assert "Vasant Lad" not in out


def test_rating_ayurvedic():
    out = process_medicinal_text("Ayur:E rating")
    assert '<strong>Ayurvedic:</strong> <span class="font-bold italic">Excellent</span>' in out
    assert out.endswith(" rating")


def test_rating_scientific_with_space_and_case():
    out = process_medicinal_text("sci: m")
    assert out == (
        '<strong>Scientific studies:</strong> '
        '<span class="font-bold italic">Moderate Clinical Support</span>'
    )


def test_rating_not_matched_inside_longer_token():
    assert process_medicinal_text("Sci:Strong") == "Sci:Strong"
    assert process_medicinal_text("XSci:S") == "XSci:S"


def test_pmid_linkified():
    out = process_medicinal_text("PMID: 12345")
    assert out == (
        '<a href="https://pubmed.ncbi.nlm.nih.gov/12345/" target="_blank" '
        'class="text-indigo-600 hover:underline">PMID: 12345</a>'
    )


def test_pmcid_linkified():
    out = process_medicinal_text("PMCID: PMC998877")
    assert out == (
        '<a href="https://www.ncbi.nlm.nih.gov/pmc/articles/PMC998877/" target="_blank" '
        'class="text-indigo-600 hover:underline">PMCID: PMC998877</a>'
    )


def test_research_citation_reduced_to_paper():
    out = process_medicinal_text("Sci:S [📌 PMID: 17569207]")
    assert "Paper: " in out
    assert "📌" not in out
    assert "[" not in out and "]" not in out
    assert out.endswith(
        'Paper: <a href="https://pubmed.ncbi.nlm.nih.gov/17569207/" target="_blank" '
        'class="text-indigo-600 hover:underline">PMID: 17569207</a>'
    )


def test_research_citation_title_discarded():
    out = process_medicinal_text('[🔬 "Stress and anxiety trial, PMCID: PMC6979308"]')
    assert "Stress and anxiety" not in out
    assert out.startswith('Paper: <a href="https://www.ncbi.nlm.nih.gov/pmc/articles/PMC6979308/"')


def test_unmatched_wrapper_kept_inline():
    assert process_medicinal_text("See [📌 Awaiting a published trial] later") == (
        "See Awaiting a published trial later"
    )


def test_closing_brackets_removed_everywhere():
    assert process_medicinal_text("Dose [morning] only") == "Dose [morning only"


def test_nested_wrapper_loses_every_closing_bracket():
    assert process_medicinal_text("[📌 see [2] notes]") == "see [2 notes"


def test_newlines_become_breaks():
    assert process_medicinal_text("Ayur:G\nSci:L") == (
        '<strong>Ayurvedic:</strong> <span class="font-bold italic">Good</span><br />'
        '<strong>Scientific studies:</strong> <span class="font-bold italic">Limited</span>'
    )


def test_second_pass_is_noop():
    text = (
        "Ayur:E (Lad, p. 112)\n"
        'Sci:M [🔬 "Stress trial, PMCID: PMC6979308"]\n'
        "Sci:S [📌 PMID: 17569207]\n"
        "Also PMID: 42"
    )
    once = process_medicinal_text(text)
    assert process_medicinal_text(once) == once
    assert once.count("<a href=") == 3


def test_custom_tables():
    stages = build_medicinal_stages(
        expand_books=True,
        ratings=[RatingRule("Tox:H", "Toxicity", "High")],
        books=[BookCitation("Frawley", "The Yoga of Herbs")],
    )
    names = [s.name for s in stages]
    assert names == [
        "book:Frawley",
        "research_citation",
        "citation_glyph",
        "closing_brackets",
        "rating:Tox:H",
        "pmcid_link",
        "pmid_link",
        "line_breaks",
    ]
    text = "Tox:H, Frawley, p. 9"
    for stage in stages:
        text = stage.apply(text)
    assert text == (
        '<strong>Toxicity:</strong> <span class="font-bold italic">High</span>, '
        "The Yoga of Herbs (Page 9)"
    )


def test_book_stages_skipped_when_disabled():
    stages = build_medicinal_stages(expand_books=False, ratings=[], books=[BookCitation("Lad", "x")])
    assert not any(s.name.startswith("book:") for s in stages)


def _pubmed_link(pmid: str, label: str = "PMID") -> str:
    return (
        f'<a href="https://pubmed.ncbi.nlm.nih.gov/{pmid}/" target="_blank" '
        f'class="text-indigo-600 hover:underline">{label}: {pmid}</a>'
    )


def test_research_citation_trailing_character():
    assert process_medicinal_text("[📌 PMID: 123.]") == "Paper: " + _pubmed_link("123")


def test_research_citation_unquoted_title():
    assert process_medicinal_text("[🔬 Trial name PMID: 5]") == "Paper: " + _pubmed_link("5")


def test_research_citation_case_insensitive():
    assert process_medicinal_text("[📌 pmid: 7]") == "Paper: " + _pubmed_link("7", "pmid")


def test_pmcid_second_pass_is_noop():
    once = process_medicinal_text("PMCID: PMC123")
    assert once == (
        '<a href="https://www.ncbi.nlm.nih.gov/pmc/articles/PMC123/" target="_blank" '
        'class="text-indigo-600 hover:underline">PMCID: PMC123</a>'
    )
    assert process_medicinal_text(once) == once


@pytest.fixture
def broken_config(tmp_path, monkeypatch):
    path = tmp_path / "formatting.yaml"
    path.write_text("html_renderer: browser\n", encoding="utf-8")
    monkeypatch.setattr(formatting_config, "DEFAULT_CONFIG_PATH", path)
    formatting_config._default_config.cache_clear()
    yield path
    formatting_config._default_config.cache_clear()


def test_broken_config_falls_back_to_builtin_tables(broken_config):
    assert process_medicinal_text("Ayur:E, Lad, p. 3") == (
        '<strong>Ayurvedic:</strong> <span class="font-bold italic">Excellent</span>, '
        "The Complete Book of Ayurvedic Home Remedies, Vasant Lad (Page 3)"
    )
