from helpers import make_page_boxes

from fontprint.app import FontPrintApp
from fontprint.core.models import Surface
from fontprint.corpus import InMemoryCorpus


def test_analyze_and_save_uses_injected_repository():
    corpus = InMemoryCorpus()
    app = FontPrintApp(corpus)

    fp = app.analyze_boxes(make_page_boxes(), Surface(200, 300), save=True)
    app.analyze_text("not stored")

    assert corpus.list() == [fp]


def test_find_best_matches_against_corpus():
    corpus = InMemoryCorpus()
    app = FontPrintApp(corpus)
    page = app.analyze_boxes(make_page_boxes(), Surface(200, 300), save=True)
    app.analyze_structured({"top": 1440, "bottom": 1440, "left": 1800, "right": 1800}, 21, save=True)
    app.analyze_text("some text", save=True)

    probe = app.analyze_boxes(make_page_boxes(), Surface(200, 300))
    matches = app.find_best_matches(probe, top_n=2)

    assert len(matches) == 2
    assert matches[0][0].id == page.id
    assert matches[0][1] > matches[1][1]


def test_compare_uses_settings():
    app = FontPrintApp(InMemoryCorpus())
    left = app.analyze_structured({"top": 1440}, 24)
    right = app.analyze_structured({"top": 1440}, 20)

    report = app.compare(left, right)

    assert report.font_overlap == ("(docx-styles)",)
    assert report.font_size_delta == 2.7
    assert 0.99 < report.similarity <= 1.0
