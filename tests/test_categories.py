from artvista.domain.categories import normalize_categories, normalize_category


def test_comma_separated_string():
    assert normalize_categories(" Painting, OIL ,, abstract ") == ["painting", "oil", "abstract"]


def test_list_input_is_trimmed_lowercased_and_deduplicated():
    assert normalize_categories([" Painting", "painting", "Sculpture "]) == ["painting", "sculpture"]


def test_list_entries_may_contain_commas():
    assert normalize_categories(["Painting, Oil"]) == ["painting", "oil"]


def test_empty_input():
    assert normalize_categories(None) == []
    assert normalize_categories("") == []
    assert normalize_category(None) == ""
    assert normalize_category("  ALL ") == "all"
