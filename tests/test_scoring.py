import pytest

from sparkplug.tasks.model import Task, Weights
from sparkplug.tasks.scoring import best_next_task, effort_penalty, rank_tasks, task_score


def make_task(task_id="t", **attrs):
    return Task(id=task_id, title=task_id, **attrs)


def test_best_case_task_under_default_weights():
    task = make_task(impact=5, urgency=5, energy_fit=5, complexity=0, effort=1)
    assert task_score(task) == pytest.approx(0.9)


def test_default_quick_add_task_score():
    # impact/urgency/fit 3, complexity 2, effort 1
    expected = (0.4 + 0.3 + 0.2) * 0.6 - 0.1 * 0.4
    assert task_score(make_task()) == pytest.approx(expected)


def test_score_is_floored_at_zero():
    task = make_task(impact=0, urgency=0, energy_fit=0, complexity=5, effort=8)
    assert task_score(task) == 0.0


def test_effort_penalty_bounds():
    assert effort_penalty(1) == 0.0
    assert effort_penalty(8) == pytest.approx(0.1)
    assert effort_penalty(20) == pytest.approx(0.1)


def test_custom_weights():
    task = make_task(impact=5, urgency=0, energy_fit=0, complexity=0, effort=1)
    assert task_score(task, Weights(impact=2.0, urgency=0, energy_fit=0, complexity=0)) == pytest.approx(2.0)


@pytest.mark.parametrize("attr", ["impact", "urgency", "energy_fit"])
def test_score_non_decreasing_in_positive_attributes(attr):
    scores = [task_score(make_task(**{attr: v})) for v in range(0, 6)]
    assert scores == sorted(scores)


@pytest.mark.parametrize("attr,values", [("complexity", range(0, 6)), ("effort", range(1, 9))])
def test_score_non_increasing_in_cost_attributes(attr, values):
    base = dict(impact=5, urgency=5, energy_fit=5)
    scores = [task_score(make_task(**base, **{attr: v})) for v in values]
    assert scores == sorted(scores, reverse=True)


def test_score_is_deterministic():
    task = make_task(impact=4, urgency=2, energy_fit=1, complexity=3, effort=5)
    assert task_score(task) == task_score(task)


def test_rank_orders_by_score_descending():
    low = make_task("low", impact=1)
    high = make_task("high", impact=5)
    mid = make_task("mid", impact=3)
    ranked = rank_tasks([low, high, mid])
    assert [t.id for t, _ in ranked] == ["high", "mid", "low"]
    assert ranked[0][1] >= ranked[1][1] >= ranked[2][1]


def test_rank_ties_keep_input_order():
    tasks = [make_task(f"t{i}") for i in range(5)]
    assert [t.id for t, _ in rank_tasks(tasks)] == ["t0", "t1", "t2", "t3", "t4"]
    assert [t.id for t, _ in rank_tasks(reversed(tasks))] == ["t4", "t3", "t2", "t1", "t0"]


def test_best_next_task_skips_done():
    done = make_task("done", impact=5, done=True)
    open_task = make_task("open", impact=1)
    assert best_next_task([done, open_task]).id == "open"
    assert best_next_task([done]) is None


def test_attributes_are_clamped():
    task = make_task(impact=9, urgency=-2, effort=0)
    assert (task.impact, task.urgency, task.effort) == (5, 0, 1)


def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        Weights(impact=-0.1)


def test_fractional_attributes_are_kept():
    task = make_task(impact=4.6, urgency=0, energy_fit=0, complexity=0, effort=1)
    assert task.impact == 4.6
    assert task_score(task) == pytest.approx(0.368)


def test_fractional_attributes_are_clamped_not_rounded():
    task = make_task(impact=5.4, effort=0.5)
    assert (task.impact, task.effort) == (5, 1)
