import pytest

from kac_bump.change_types import ChangeType, menu_lines
from kac_bump.document import Release, release_mutation

_expected_keys = [
    (1, "Added"),
    (2, "Changed"),
    (3, "Removed"),
    (4, "Fixed"),
    (5, "Deprecated"),
    (6, "Security"),
]


@pytest.mark.parametrize(
    "key,label", _expected_keys, ids=[label for _, label in _expected_keys]
)
def test_from_key(key, label):
    change_type = ChangeType.from_key(key)
    assert change_type is not None
    assert change_type.label == label


@pytest.mark.parametrize("key", [0, 7, -1])
def test_from_key_unknown(key):
    assert ChangeType.from_key(key) is None


def test_from_label_is_case_insensitive():
    assert ChangeType.from_label("security") == ChangeType.SECURITY
    assert ChangeType.from_label(" FIXED ") == ChangeType.FIXED
    assert ChangeType.from_label("Breaking") is None


def test_menu_lines():
    assert menu_lines() == [f"{key}. {label}" for key, label in _expected_keys]


@pytest.mark.parametrize("change_type", list(ChangeType))
def test_release_mutation_files_entry_under_change_type(change_type):
    release = Release(version="1.0.0")
    release_mutation(change_type)(release, "something")
    assert release.changes == {change_type: ["something"]}
