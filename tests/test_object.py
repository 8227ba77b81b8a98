from apiexpect.expect import Expect
from apiexpect.reporter import RecordingReporter


def _expect():
    reporter = RecordingReporter()
    return Expect(reporter), reporter


def test_object_requires_map():
    expect, reporter = _expect()
    expect.object([1, 2]).contains_key("a")
    assert len(reporter.messages) == 1
    assert "expected: valid map" in reporter.messages[0]


def test_object_keys_values_and_value():
    expect, reporter = _expect()
    obj = expect.object({"b": 2, "a": 1})
    obj.keys().is_equal(["a", "b"])
    obj.values().is_equal([1, 2])
    obj.value("a").number().is_equal(1)
    obj.length().is_equal(2)
    obj.not_empty()
    assert not reporter.failed

    obj.value("missing")
    assert "expected: map contains key" in reporter.messages[0]


def test_object_iter_paths():
    expect, reporter = _expect()
    items = expect.object({"a": 1, "b": "x"}).iter()
    assert sorted(items) == ["a", "b"]
    items["b"].number()
    assert "iter['b'].number()" in reporter.messages[0]


def test_object_equality_and_keys():
    expect, reporter = _expect()
    obj = expect.object({"a": 1, "b": [1, 2]})
    obj.is_equal({"b": [1, 2], "a": 1.0})
    obj.not_equal({"a": 1})
    obj.contains_key("a").not_contains_key("c")
    obj.contains_value([1, 2]).not_contains_value(3)
    assert not reporter.failed


def test_object_contains_subset_nested():
    expect, reporter = _expect()
    obj = expect.object({"a": {"x": 1, "y": 2}, "b": [1, 2]})
    obj.contains_subset({"a": {"x": 1}})
    obj.not_contains_subset({"b": [1]})
    assert not reporter.failed

    obj.contains_subset({"a": {"z": 1}})
    assert "expected: map contains sub-map" in reporter.messages[0]


def test_object_has_value():
    expect, reporter = _expect()
    obj = expect.object({"a": 1})
    obj.has_value("a", 1).not_has_value("a", 2)
    assert not reporter.failed

    obj.has_value("a", 2)
    obj.has_value("b", 1)
    assert len(reporter.messages) == 2


def test_object_every_reports_each_failure():
    expect, reporter = _expect()
    expect.object({"a": 1, "b": "x", "c": "y"}).every(lambda key, value: value.number())
    assert len(reporter.messages) == 2
    assert "every['b']" in reporter.messages[0]


def test_object_filter_is_isolated():
    expect, reporter = _expect()
    kept = expect.object({"a": 1, "b": "x"}).filter(
        lambda key, value: value.number().gt(0) is not None
    )
    kept.is_equal({"a": 1})
    assert not reporter.failed


def test_object_every_none_function():
    expect, reporter = _expect()
    expect.object({}).every(None)
    assert "unexpected None function argument" in reporter.messages[0]


def test_object_filter_sees_nested_every_failures():
    expect, reporter = _expect()

    def _all_positive(key, value):
        value.array().every(lambda index, item: item.number().gt(0))
        return True

    kept = expect.object({"a": [1, 2], "b": [3, -4]}).filter(_all_positive)
    kept.is_equal({"a": [1, 2]})
    assert not reporter.failed
