import json
import suite
import numpy as np
import pandas as pd
from kollect import Collection, configure, reset_config, DuplicateKey
from fixtures import characters

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

# helper data
cast = Collection(characters())
letters = Collection({'a': 1, 'b': 2, 'c': 3})
empty = Collection([])


# queries

@test("get and has look up keys")
def test_get_has():
    assert_that(letters.get('b') == 2, "existing key")
    assert_that(letters.get('z') is None and letters.get('z', 0) == 0, "default for missing keys")
    assert_that(letters.has('c') and not letters.has('z'), "has")
    assert_that(not Collection([1]).has('0'), "key lookup is type-strict")


@test("first and last, with and without a predicate")
def test_first_last():
    assert_that(letters.first() == 1 and letters.last() == 3, "ends")
    assert_that(letters.first(lambda v: v > 1) == 2, "first match")
    assert_that(letters.last(lambda v, k: k != 'c') == 2, "last match using the key")
    assert_that(empty.first() is None and empty.last(default='x') == 'x', "defaults")


@test("find returns the first matching value")
def test_find():
    assert_that(cast.find(lambda c: c['age'] > 35)['name'] == 'Davos Seaworth', "oldest first match")
    assert_that(cast.find(lambda c: c['age'] > 99, 'nobody') == 'nobody', "default")


@test("every and some")
def test_every_some():
    assert_that(cast.every(lambda c: c['age'] > 5), "all older than 5")
    assert_that(not cast.every(lambda c: c['age'] > 10), "not all older than 10")
    assert_that(cast.some(lambda c, k: k == 15), "key 15 exists")
    assert_that(empty.every(lambda v: False) and not empty.some(lambda v: True), "empty cases")


@test("reduce folds with carry, value and key")
def test_reduce():
    assert_that(letters.reduce(lambda carry, v: carry + v, 0) == 6, "sum of values")
    assert_that(letters.reduce(lambda carry, v, k: carry + k, '') == 'abc', "concatenated keys")


@test("reduce wraps iterable results in a collection")
def test_reduce_iterable():
    result = letters.reduce(lambda carry, v: carry + [v * 2], [])
    assert_that(isinstance(result, Collection), "should be a collection")
    assert_that(result.to.list() == [2, 4, 6], "with the accumulated values")
    assert_that(letters.reduce(lambda carry, v: carry + str(v), '') == '123', "strings stay strings")


@test("implode joins values")
def test_implode():
    assert_that(letters.implode() == '1, 2, 3', "default glue")
    assert_that(cast.take(2).implode(' & ', 'name') == 'Eddard Stark & Catelyn Stark', "selected field")


@test("is_empty and is_not_empty")
def test_emptiness():
    assert_that(empty.is_empty() and not empty.is_not_empty(), "empty")
    assert_that(letters.is_not_empty(), "not empty")


@test("to_array and json_serialize realize the pairs")
def test_to_array():
    assert_that(letters.to_array() == {'a': 1, 'b': 2, 'c': 3}, "dict of pairs")
    assert_that(letters.json_serialize() == letters.to_array() == letters.all(), "same realization")


# conversions

@test("to.list and to.dict")
def test_to_list_dict():
    assert_that(letters.to.list() == [1, 2, 3], "values only")
    assert_that(letters.to.dict() == {'a': 1, 'b': 2, 'c': 3}, "pairs")


@test("to.array builds a numpy array")
def test_to_array_numpy():
    array = Collection([1, 2, 3]).to.array()
    assert_that(isinstance(array, np.ndarray), "numpy array")
    assert_that(array.sum() == 6 and array.shape == (3,), "with the values")


@test("to.series is indexed by key")
def test_to_series():
    series = letters.to.series()
    assert_that(isinstance(series, pd.Series), "pandas series")
    assert_that(list(series.index) == ['a', 'b', 'c'] and series['b'] == 2, "keys become the index")


@test("to.df turns records into rows")
def test_to_df():
    frame = cast.index_by('id').to.df()
    assert_that(isinstance(frame, pd.DataFrame), "pandas dataframe")
    assert_that(frame.shape == (16, 3), "one row per character")
    assert_that(frame.loc[3, 'name'] == 'Daenerys Targaryen', "indexed by key")


@test("to.json encodes nested collections")
def test_to_json():
    nested = Collection({'group': Collection([1, 2]), 'plain': [Collection({'x': 1})]})
    decoded = json.loads(nested.to.json())
    assert_that(decoded == {'group': {'0': 1, '1': 2}, 'plain': [{'x': 1}]}, "collections become objects")


@test("to.json uses the configured indent")
def test_to_json_indent():
    try:
        configure(json_indent=2)
        assert_that('\n  "a": 1' in letters.to.json(), "indented by default")
    finally:
        reset_config()
    assert_that(letters.to.json() == '{"a": 1, "b": 2, "c": 3}', "compact after reset")
    assert_that('\n    "a"' in letters.to.json(indent=4), "explicit indent")


@test("conversions respect duplicate keys")
def test_conversions_duplicates():
    doubled = Collection([1, 2]).concat([3])
    assert_raises(DuplicateKey, doubled.to.dict)
    assert_that(doubled.to.list() == [1, 2, 3], "to.list never looks at keys")


if __name__ == "__main__":
    suite.run(title="kollect query and conversion tests")
