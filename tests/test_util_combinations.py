from cryptoadvance.derivation.util.combinations import item_combinations


def test_item_combinations_order():
    # ordered by the bitmask, not by size
    assert item_combinations(["a", "b", "c"]) == [
        ["a"],
        ["b"],
        ["a", "b"],
        ["c"],
        ["a", "c"],
        ["b", "c"],
        ["a", "b", "c"],
    ]


def test_item_combinations_empty():
    assert item_combinations([]) == []
    assert item_combinations([], minimum_items=0) == [[]]


def test_item_combinations_limits():
    assert item_combinations(["a", "b"], minimum_items=0) == [
        [],
        ["a"],
        ["b"],
        ["a", "b"],
    ]
    assert item_combinations(["a", "b", "c"], minimum_items=2, maximum_items=2) == [
        ["a", "b"],
        ["a", "c"],
        ["b", "c"],
    ]
    assert len(item_combinations(range(4))) == 15
