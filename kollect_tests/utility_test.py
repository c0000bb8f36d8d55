import random
import suite
from kollect import Collection, CollectionCollection, InvalidArgument, InvalidReturnValue
from fixtures import characters

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

# helper data
numbers = Collection(range(1, 11))  # 1 through 10
cast = Collection(characters())


@test("each runs a side effect lazily and passes pairs through")
def test_each():
    seen = []
    tapped = Collection({'a': 1, 'b': 2}).each(lambda v, k: seen.append((k, v)))
    assert_that(seen == [], "nothing runs before realization")
    assert_that(tapped.to_array() == {'a': 1, 'b': 2}, "pairs unchanged")
    assert_that(seen == [('a', 1), ('b', 2)], "called once per pair")


@test("shuffle permutes pairs and keeps keys")
def test_shuffle():
    random.seed(1234)
    shuffled = numbers.shuffle()
    assert_that(sorted(shuffled.to.list()) == list(range(1, 11)), "same values")
    assert_that(all(shuffled.get(key) == key + 1 for key in range(10)), "every key still maps to its value")
    assert_that(shuffled.to.list() == shuffled.to.list(), "the order is fixed once shuffled")


@test("random picks pairs in their original order")
def test_random():
    random.seed(99)
    picked = cast.random(4)
    keys = picked.keys().to.list()
    assert_that(len(keys) == 4 and keys == sorted(keys), "four keys, ascending")
    assert_that(all(picked.get(key) == cast.get(key) for key in keys), "pairs are intact")
    assert_that(cast.random().count() == 1, "one by default")


@test("random rejects impossible counts")
def test_random_range():
    assert_raises(InvalidArgument, lambda: numbers.random(11))
    assert_raises(InvalidArgument, lambda: numbers.random(0))
    assert_raises(InvalidArgument, lambda: Collection([]).random())


@test("transform hands over the whole collection")
def test_transform():
    doubled = numbers.transform(lambda c: c.map(lambda v: v * 2))
    assert_that(doubled.to.list() == [2, 4, 6, 8, 10, 12, 14, 16, 18, 20], "callback result is returned")


@test("transform requires a collection back")
def test_transform_return_value():
    assert_raises(InvalidReturnValue, lambda: numbers.transform(lambda c: c.to.list()))


@test("transpose turns rows into columns")
def test_transpose():
    rows = Collection([Collection([1, 2, 3]), Collection([4, 5, 6])])
    columns = rows.transpose()
    assert_that(isinstance(columns, CollectionCollection), "a collection of collections")
    assert_that(columns.map(lambda c: c.to.list()).to.list() == [[1, 4], [2, 5], [3, 6]], "columns")


@test("transpose pads short rows")
def test_transpose_ragged():
    rows = Collection([Collection([1, 2]), Collection([3])])
    assert_that(rows.transpose().map(lambda c: c.to.list()).to.list() == [[1, 3], [2, None]], "padded with None")


@test("transpose needs collections")
def test_transpose_invalid():
    assert_raises(InvalidArgument, lambda: Collection([[1, 2], [3, 4]]).transpose())


if __name__ == "__main__":
    suite.run(title="kollect utility tests")
