def item_combinations(items, minimum_items=1, maximum_items=None):
    """Returns all combinations of items (as lists), preserving the order of
    items within each combination.

    Combination number i (1 <= i < 2**len(items)) contains items[j] if bit j
    of i is set, and combinations are returned in the order of i. So this is
    not sorted by size: ["a", "b"] comes before ["c"].

    With minimum_items=0 the empty combination is returned first.
    """
    items = list(items)
    if maximum_items is None:
        maximum_items = len(items)
    combinations = []
    if minimum_items == 0:
        combinations.append([])
    for i in range(1, 2 ** len(items)):
        combination = [item for j, item in enumerate(items) if (i >> j) & 1]
        if minimum_items <= len(combination) <= maximum_items:
            combinations.append(combination)
    return combinations
