import pytest

from reffinder.core.enums import AssetCategory, SortDirection, SortKey
from reffinder.features.reference_detection.domain.models import ReferenceRecord
from reffinder.features.result_aggregation.domain.models import ResultFilter, categorize
from reffinder.features.result_aggregation.service.api import (
    describe_results, filter_records, sort_records, toggle_sort,
)


@pytest.fixture
def records():
    return [
        ReferenceRecord("Assets/b.prefab", "g1", 3),
        ReferenceRecord("Assets/Scenes/Main.unity", "g2", -1),
        ReferenceRecord("Assets/A.mat", "g3", 0),
        ReferenceRecord("Assets/Data/Config.asset", "g4", 12),
        ReferenceRecord("Assets/UI/Button.prefab", "g5", -1),
    ]


def test_path_sort_is_ordinal(records):
    paths = [r.path for r in sort_records(records, SortKey.PATH, SortDirection.ASCENDING)]
    # Upper-case letters sort before lower-case ones
    assert paths == [
        "Assets/A.mat",
        "Assets/Data/Config.asset",
        "Assets/Scenes/Main.unity",
        "Assets/UI/Button.prefab",
        "Assets/b.prefab",
    ]


def test_descending_path_sort_is_exact_reverse(records):
    ascending = sort_records(records, SortKey.PATH, SortDirection.ASCENDING)
    descending = sort_records(records, SortKey.PATH, SortDirection.DESCENDING)
    assert descending == list(reversed(ascending))


def test_unknown_count_sorts_lowest(records):
    counts = [r.ref_count for r in sort_records(records, SortKey.REF_COUNT, SortDirection.ASCENDING)]
    assert counts == [-1, -1, 0, 3, 12]


def test_count_ties_keep_insertion_order(records):
    ordered = sort_records(records, SortKey.REF_COUNT, SortDirection.ASCENDING)
    assert [r.path for r in ordered[:2]] == ["Assets/Scenes/Main.unity", "Assets/UI/Button.prefab"]

    reverse = sort_records(records, SortKey.REF_COUNT, SortDirection.DESCENDING)
    assert [r.ref_count for r in reverse] == [12, 3, 0, -1, -1]
    assert [r.path for r in reverse[3:]] == ["Assets/Scenes/Main.unity", "Assets/UI/Button.prefab"]


def test_sort_returns_a_new_list(records):
    original = list(records)
    sort_records(records, SortKey.PATH, SortDirection.DESCENDING)
    assert records == original


def test_categories():
    assert categorize("Assets/Main.unity") == AssetCategory.SCENE
    assert categorize("Assets/B.prefab") == AssetCategory.PREFAB
    assert categorize("Assets/A.mat") == AssetCategory.MATERIAL
    assert categorize("Assets/C.asset") == AssetCategory.OTHER


def test_category_filter(records):
    view = filter_records(records, ResultFilter(include_prefabs=False, include_others=False))
    assert [r.path for r in view] == ["Assets/Scenes/Main.unity", "Assets/A.mat"]


def test_search_is_case_folded(records):
    view = filter_records(records, ResultFilter(search="BUTTON"))
    assert [r.path for r in view] == ["Assets/UI/Button.prefab"]


def test_filter_combines_category_and_search(records):
    view = filter_records(records, ResultFilter(include_scenes=False, search="main"))
    assert view == []


def test_filter_does_not_mutate_input(records):
    original = list(records)
    view = filter_records(records, ResultFilter(include_materials=False))
    view.clear()
    assert records == original


def test_no_filter_returns_everything(records):
    assert filter_records(records) == records
    assert filter_records(records, ResultFilter()) == records


def test_toggle_sort():
    assert toggle_sort(SortKey.PATH, SortDirection.ASCENDING, SortKey.PATH) == (SortKey.PATH, SortDirection.DESCENDING)
    assert toggle_sort(SortKey.PATH, SortDirection.DESCENDING, SortKey.PATH) == (SortKey.PATH, SortDirection.ASCENDING)
    assert toggle_sort(SortKey.PATH, SortDirection.DESCENDING, SortKey.REF_COUNT) == (
        SortKey.REF_COUNT, SortDirection.ASCENDING
    )


def test_describe_results():
    assert describe_results(5, 5) == "Total 5 result(s) found."
    assert describe_results(5, 5, ResultFilter()) == "Total 5 result(s) found."
    assert describe_results(5, 2, ResultFilter(search="x")) == (
        "Total 5 result(s) found, 2 result(s) left after filtering."
    )
