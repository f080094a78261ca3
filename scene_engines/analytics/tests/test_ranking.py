from scene_engines.analytics.ranking import top_k


def test_top_five_of_seven_sorted_descending():
    totals = {f"s{i}": {"title": f"Scene {i}", "views": i * 10} for i in range(1, 8)}
    labels, counts = top_k(totals)
    assert counts == [70, 60, 50, 40, 30]
    assert labels == ["Scene 7", "Scene 6", "Scene 5", "Scene 4", "Scene 3"]


def test_fewer_than_k_returns_all():
    labels, counts = top_k({"a": {"title": "A", "views": 1}, "b": {"views": "4"}})
    assert labels == ["Unknown", "A"]
    assert counts == [4, 1]


def test_ties_keep_document_order_and_bad_views_are_zero():
    totals = {"a": {"title": "A", "views": 2}, "b": {"title": "B", "views": 2}, "c": {"title": "C", "views": "x"}}
    assert top_k(totals) == (["A", "B", "C"], [2, 2, 0])


def test_empty_inputs():
    assert top_k(None) == ([], [])
    assert top_k({}) == ([], [])
    assert top_k("nope") == ([], [])
