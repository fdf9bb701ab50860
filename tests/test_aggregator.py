import pytest

from ui_quality.accumulator import RunAccumulator
from ui_quality.aggregator import DEFAULT_COEFFICIENTS, ScoreAggregator, redistribute_weights
from ui_quality.models import MetricCategory, MetricSample, ScoreCoefficients, UiNode

ALL_CATEGORIES = list(MetricCategory)


def _acc_with(samples):
    acc = RunAccumulator()
    for category, values in samples.items():
        for value in values:
            acc.samples[category].append(MetricSample(category=category, value=value))
    return acc


def _full_acc():
    return _acc_with({
        MetricCategory.TOUCH_AREA: [0.25, 1.0],
        MetricCategory.ELEMENT_SPACING: [1.0, 0.5],
        MetricCategory.EDGE_SPACING: [0.0, 1.0],
        MetricCategory.CONTENT_DESCRIPTION: [1.0, 0.0, 1.0, 1.0],
        MetricCategory.HINT_TEXT: [1.0],
    })


def test_empty_run_scores_perfect():
    scores = ScoreAggregator().aggregate(RunAccumulator())

    assert all(value == 1.0 for value in scores.category_averages.values())
    assert all(value == 1.0 for value in scores.category_minima.values())
    assert scores.coefficients == DEFAULT_COEFFICIENTS
    assert scores.weighted_average_score == pytest.approx(1.0)
    assert scores.weighted_minimum_score == pytest.approx(1.0)


def test_category_averages_and_minima():
    scores = ScoreAggregator().aggregate(_full_acc())

    assert scores.category_averages[MetricCategory.TOUCH_AREA] == pytest.approx(0.625)
    assert scores.category_minima[MetricCategory.TOUCH_AREA] == 0.25
    assert scores.category_averages[MetricCategory.CONTENT_DESCRIPTION] == pytest.approx(0.75)
    assert scores.category_minima[MetricCategory.EDGE_SPACING] == 0.0


def test_weighted_scores_use_default_weights_when_all_filled():
    scores = ScoreAggregator().aggregate(_full_acc())

    expected_average = 0.625 * 0.3 + 0.75 * 0.2 + 0.5 * 0.2 + 0.75 * 0.15 + 1.0 * 0.15
    expected_minimum = 0.25 * 0.3 + 0.5 * 0.2 + 0.0 * 0.2 + 0.0 * 0.15 + 1.0 * 0.15
    assert scores.coefficients == DEFAULT_COEFFICIENTS
    assert scores.weighted_average_score == pytest.approx(expected_average)
    assert scores.weighted_minimum_score == pytest.approx(expected_minimum)
    assert scores.weighted_minimum_score <= scores.weighted_average_score


def test_single_empty_category_redistributes_a_quarter_each():
    coefficients = redistribute_weights(DEFAULT_COEFFICIENTS, {MetricCategory.TOUCH_AREA})

    assert coefficients.touch_area == 0.0
    assert coefficients.element_spacing == pytest.approx(0.275)
    assert coefficients.edge_spacing == pytest.approx(0.275)
    assert coefficients.content_description == pytest.approx(0.225)
    assert coefficients.hint_text == pytest.approx(0.225)
    assert sum(coefficients.as_dict().values()) == pytest.approx(1.0)


@pytest.mark.parametrize("empty_count", [0, 1, 2, 3, 4, 5])
def test_weights_always_sum_to_one(empty_count):
    coefficients = redistribute_weights(DEFAULT_COEFFICIENTS, ALL_CATEGORIES[:empty_count])

    assert sum(coefficients.as_dict().values()) == pytest.approx(1.0)
    assert all(weight >= 0.0 for weight in coefficients.as_dict().values())


def test_several_empty_categories_share_their_weight():
    empty = {MetricCategory.TOUCH_AREA, MetricCategory.HINT_TEXT}
    coefficients = redistribute_weights(DEFAULT_COEFFICIENTS, empty)

    assert coefficients.touch_area == 0.0
    assert coefficients.hint_text == 0.0
    assert coefficients.element_spacing == pytest.approx(0.2 + 0.45 / 3)
    assert coefficients.content_description == pytest.approx(0.15 + 0.45 / 3)


def test_redistribution_does_not_touch_defaults():
    redistribute_weights(DEFAULT_COEFFICIENTS, {MetricCategory.TOUCH_AREA})

    assert DEFAULT_COEFFICIENTS == ScoreCoefficients()


def test_empty_category_is_redistributed_in_scores():
    acc = _full_acc()
    acc.samples[MetricCategory.TOUCH_AREA].clear()

    scores = ScoreAggregator().aggregate(acc)

    assert scores.coefficients.touch_area == 0.0
    assert scores.coefficients.element_spacing == pytest.approx(0.275)
    assert scores.category_averages[MetricCategory.TOUCH_AREA] == 1.0


def test_aggregation_is_idempotent():
    aggregator = ScoreAggregator()
    acc = _full_acc()

    assert aggregator.aggregate(acc) == aggregator.aggregate(acc)


def test_repeated_empty_runs_do_not_decay_weights():
    aggregator = ScoreAggregator()
    sparse = _acc_with({MetricCategory.HINT_TEXT: [0.0]})

    for _ in range(5):
        aggregator.aggregate(sparse)

    full = aggregator.aggregate(_full_acc())
    assert full.coefficients == DEFAULT_COEFFICIENTS


def test_scores_stay_in_unit_range():
    acc = _acc_with({category: [1.0] * 3 for category in MetricCategory})
    scores = ScoreAggregator().aggregate(acc)

    assert 0.0 <= scores.weighted_average_score <= 1.0
    assert 0.0 <= scores.weighted_minimum_score <= 1.0


def test_worst_case_run_scores_zero():
    acc = _acc_with({category: [0.0] for category in MetricCategory})
    scores = ScoreAggregator().aggregate(acc)

    assert scores.weighted_average_score == 0.0
    assert scores.weighted_minimum_score == 0.0


def test_samples_recorded_through_accumulator():
    acc = RunAccumulator()
    node = UiNode(kind="Button", id="ok")
    acc.record_score(node, MetricCategory.TOUCH_AREA, 2.0, sample_value=1.0)

    assert acc.values(MetricCategory.TOUCH_AREA) == [1.0]
    assert acc.findings[0].scores[MetricCategory.TOUCH_AREA] == 2.0
    assert acc.empty_categories() == set(MetricCategory) - {MetricCategory.TOUCH_AREA}
