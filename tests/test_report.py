from conftest import make_node
from ui_quality.aggregator import ScoreAggregator
from ui_quality.models import ElementKind, UiNode
from ui_quality.report import EXPORT_HEADER, NO_ISSUES_MESSAGE, NO_ROOT_MESSAGE, render_export, render_narrative
from ui_quality.walker import TreeWalker


def _run(root, display):
    acc = TreeWalker().walk(root, display)
    return acc, ScoreAggregator().aggregate(acc)


def _sample_tree():
    return UiNode(id="root", children=[
        make_node(ElementKind.BUTTON, width=24, height=24, id="small_button"),
        make_node(ElementKind.EDIT_TEXT, left=50, top=50, width=100, height=40, id="email"),
        make_node(ElementKind.IMAGE_VIEW, left=50, top=100, width=40, height=40, id="logo"),
        make_node(ElementKind.TEXT_VIEW, left=50, top=150, width=100, height=20, text="Hello"),
    ])


def _narrative_blocks(narrative):
    blocks = []
    for line in narrative.splitlines():
        if " found: ID=" in line:
            kind, element_id = line.split(" found: ID=", 1)
            blocks.append((kind, element_id))
    return blocks


def _export_rows(export):
    lines = export.splitlines()
    return [line.split(";") for line in lines[1:lines.index("")]]


def test_narrative_headline_scores(display):
    acc, scores = _run(_sample_tree(), display)
    narrative = render_narrative(acc, scores)
    lines = narrative.splitlines()

    assert lines[0] == f"UI Quality Score: {scores.weighted_average_score:.3f}"
    assert lines[1].startswith("(calculated in 0-1 scale")
    assert lines[2] == f"UI Quality Minimal Score: {scores.weighted_minimum_score:.3f}"
    assert "Elements analyzed: 5" in lines


def test_narrative_lists_issue_blocks(display):
    acc, scores = _run(_sample_tree(), display)
    narrative = render_narrative(acc, scores)

    assert "List of identified issues:" in narrative
    assert "Button found: ID=small_button\n - Issue: Touch target is too small" in narrative
    assert " - Issue: EditText is missing a hint.\n" in narrative
    assert " - Suggestion: Add a content description for accessibility.\n" in narrative
    assert "TextView found" not in narrative


def test_narrative_without_issues(display):
    root = UiNode(children=[make_node(ElementKind.EDIT_TEXT, hint="Name")])
    acc, scores = _run(root, display)

    assert NO_ISSUES_MESSAGE in render_narrative(acc, scores)


def test_narrative_for_absent_root(display):
    acc, scores = _run(None, display)
    narrative = render_narrative(acc, scores)

    assert NO_ROOT_MESSAGE in narrative
    assert narrative.startswith("UI Quality Score: 1.000")


def test_narrative_mentions_truncation(display):
    deep = UiNode(children=[UiNode(children=[UiNode()])])
    acc = TreeWalker(max_depth=1).walk(deep, display)
    narrative = render_narrative(acc, ScoreAggregator().aggregate(acc))

    assert "exceeded the maximum depth" in narrative


def test_export_header_and_trailer(display):
    acc, scores = _run(_sample_tree(), display)
    lines = render_export(acc, scores).splitlines()

    assert lines[0] == EXPORT_HEADER
    assert len(lines[0].split(";")) == 11

    trailer = lines[-5:]
    assert trailer[0] == ""
    assert trailer[1].startswith(";;;;;Average scores:;")
    assert trailer[2].startswith(";;;;;Coefficients:;")
    assert trailer[3] == f";;;;;UI Quality Score:;{scores.weighted_average_score:.3f}"
    assert trailer[4] == f";;;;;UI Quality Minimal Score:;{scores.weighted_minimum_score:.3f}"
    assert len(trailer[1].split(";")) == 11


def test_export_coefficients_are_post_redistribution(display):
    # No checkbox or button: spacing and touch categories are empty
    root = UiNode(children=[
        make_node(ElementKind.EDIT_TEXT, id="name"),
        make_node(ElementKind.IMAGE_VIEW, id="logo", content_description="Logo"),
    ])
    acc, scores = _run(root, display)
    coefficients_row = render_export(acc, scores).splitlines()[-3]

    assert coefficients_row == ";;;;;Coefficients:;0.000;0.000;0.000;0.500;0.500"


def test_export_fills_only_applicable_score_columns(display):
    acc, scores = _run(_sample_tree(), display)
    rows = {row[1]: row for row in _export_rows(render_export(acc, scores))}

    button = rows["small_button"]
    assert button[0] == "Button"
    assert button[6:] == ["0.250", "1.000", "0.000", "", ""]
    assert button[4:6] == ["", ""]

    edit_text = rows["email"]
    assert edit_text[6:] == ["", "", "", "", "0.000"]
    assert edit_text[2] == "EditText is missing a hint."

    image = rows["logo"]
    assert image[6:] == ["", "", "", "0.000", ""]


def test_export_joins_multiple_issues_of_one_element(display):
    acc, scores = _run(_sample_tree(), display)
    rows = {row[1]: row for row in _export_rows(render_export(acc, scores))}

    assert rows["small_button"][2] == (
        "Touch target is too small (24.0 x 24.0 dp). | "
        "Element is too close to the left, top edges (left 0.0 dp, top 0.0 dp)."
    )


def test_export_escapes_separator(display):
    root = UiNode(children=[make_node(ElementKind.EDIT_TEXT, id="a;b")])
    acc, scores = _run(root, display)
    rows = _export_rows(render_export(acc, scores))

    assert rows[0][1] == "a,b"
    assert len(rows[0]) == 11


def test_every_narrative_block_has_one_export_row(display):
    root = UiNode(id="root", children=[
        _sample_tree(),
        make_node(ElementKind.CHECK_BOX, left=20, top=20, width=48, height=48, id="agree"),
        make_node(ElementKind.IMAGE_BUTTON, left=70, top=20, width=40, height=40, id="share"),
    ])
    acc, scores = _run(root, display)

    blocks = _narrative_blocks(render_narrative(acc, scores))
    rows = [(row[0], row[1]) for row in _export_rows(render_export(acc, scores))]

    assert blocks == rows
    assert len(blocks) == len(set(blocks))
