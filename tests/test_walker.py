from apiscout.extractors.walker import walk


def test_walk_pre_order_over_dicts_and_lists():
    tree = {
        "id": "root",
        "a": {"id": "a", "b": {"id": "b"}},
        "c": [{"id": "c1"}, {"id": "c2", "d": [{"id": "d1"}]}],
        "n": 3,
        "s": "text",
    }
    seen = []
    walk(tree, lambda node: seen.append(node["id"]))
    assert seen == ["root", "a", "b", "c1", "c2", "d1"]


def test_walk_list_root_and_scalars():
    seen = []
    walk([{"id": 1}, "x", 2, None, [{"id": 2}]], lambda node: seen.append(node["id"]))
    assert seen == [1, 2]

    walk("just a string", lambda node: seen.append(node))
    assert seen == [1, 2]


def test_walk_handles_nesting_beyond_recursion_limit():
    tree: dict = {"depth": 0}
    node = tree
    for depth in range(1, 5000):
        child = {"depth": depth}
        node["next"] = [child]
        node = child

    seen = []
    walk(tree, lambda n: seen.append(n["depth"]))
    assert seen == list(range(5000))
