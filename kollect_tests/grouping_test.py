import suite
from kollect import Collection, CollectionCollection, DuplicateKey, InvalidArgument
from fixtures import characters, people

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

# helper data
cast = Collection(characters())
numbers = Collection(range(1, 8))  # 1 through 7


@test("group_by collects values under their selected key")
def test_group_by():
    groups = cast.group_by(lambda c: c['name'].split()[-1])
    assert_that(isinstance(groups, CollectionCollection), "should be a collection of collections")
    assert_that(groups.get('Stark').count() == 5, "five plain Starks")
    assert_that(groups.get('Lannister').extract('age').to.list() == [24, 31, 31], "in original order")
    assert_that(groups.get('Stark').keys().to.list() == list(range(5)), "members are keyed from zero")


@test("group_by keeps the order in which keys first appear")
def test_group_by_order():
    groups = numbers.group_by(lambda v: 'even' if v % 2 == 0 else 'odd')
    assert_that(groups.keys().to.list() == ['odd', 'even'], "odd comes first")


@test("group_by with a field name")
def test_group_by_field():
    staff = Collection(people(30, seed=7))
    groups = staff.group_by('department')
    assert_that(groups.map(lambda g: g.count()).sum() == 30, "every person lands in a group")
    for department, members in groups.items():
        assert_that(members.every(lambda p: p['department'] == department), f"{department} is homogeneous")


@test("count_by and frequencies count group members")
def test_count_by():
    counts = cast.count_by(lambda c: c['age'] >= 18)
    assert_that(counts.to_array() == {True: 8, False: 8}, "eight adults, eight minors")
    assert_that(Collection(['a', 'b', 'a']).frequencies().to_array() == {'a': 2, 'b': 1}, "value frequencies")


@test("chunk splits into fixed-size pieces, keeping keys")
def test_chunk():
    chunks = numbers.chunk(3)
    assert_that(chunks.count() == 3, "three chunks")
    assert_that(chunks.map(lambda c: c.to.list()).to.list() == [[1, 2, 3], [4, 5, 6], [7]], "last one shorter")
    assert_that(chunks.get(1).keys().to.list() == [3, 4, 5], "keys are preserved")


@test("chunk without preserving keys re-keys each piece")
def test_chunk_rekeyed():
    chunks = numbers.chunk(3, preserve_keys=False)
    assert_that(chunks.get(1).to_array() == {0: 4, 1: 5, 2: 6}, "keys from zero")


@test("chunk rejects sizes below one and handles empty input")
def test_chunk_edges():
    assert_raises(InvalidArgument, lambda: numbers.chunk(0))
    assert_that(Collection([]).chunk(2).is_empty(), "no chunks")


@test("split divides into a number of groups")
def test_split():
    groups = numbers.split(3)
    assert_that(groups.map(lambda c: c.count()).to.list() == [3, 3, 1], "ceil(7 / 3) per group")
    assert_that(Collection([]).split(3).is_empty(), "nothing to split")
    assert_raises(InvalidArgument, lambda: numbers.split(0))


@test("split reads a generator once")
def test_split_single_use():
    groups = Collection(v for v in [1, 2, 3, 4]).split(2)
    assert_that(groups.map(lambda c: c.to.list()).to.list() == [[1, 2], [3, 4]], "two groups of two")


@test("flattening re-keyed splits produces duplicate keys")
def test_split_flatten_duplicates():
    flattened = Collection([1, 2, 3, 4]).split(2, preserve_keys=False).flatten(1)
    assert_raises(DuplicateKey, flattened.to_array)
    assert_that(flattened.values().to.list() == [1, 2, 3, 4], "values() gets around it")


if __name__ == "__main__":
    suite.run(title="kollect grouping tests")
