from pathlib import Path

import pytest

from valigo.locales import flatten, locales_from_dir


@pytest.mark.parametrize(
    "source, expected",
    [
        ({"key": "value"}, {"key": "value"}),
        ({"key": {"nestedKey": "nestedValue"}}, {"key:nestedKey": "nestedValue"}),
        (
            {"key": {"nestedKey": {"deepKey": "deepValue"}}},
            {"key:nestedKey:deepKey": "deepValue"},
        ),
    ],
)
def test_flatten(source, expected):
    assert flatten(source, "") == expected


def test_flatten_with_prefix():
    assert flatten({"a": "b"}, "root") == {"root:a": "b"}


def test_flatten_ignores_non_string_values():
    assert flatten({"a": 1, "b": "x", "c": [1, 2]}) == {"b": "x"}


def _write(root: Path, name: str, data: str) -> None:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data, encoding="utf-8")


def test_locales_from_dir(tmp_path):
    _write(tmp_path, "locales/en/data.yaml", "key: value")
    _write(tmp_path, "locales/fr/data.yaml", "key: value2")

    locales = locales_from_dir(tmp_path)

    assert locales == {"en": {"key": "value"}, "fr": {"key": "value2"}}


def test_locales_from_dir_nested_keys(tmp_path):
    _write(
        tmp_path,
        "locales/en/data.yaml",
        "validation:\n  string:\n    Should be fulfilled: Should be fulfilled\n",
    )
    locales = locales_from_dir(str(tmp_path))
    assert locales["en"] == {
        "validation:string:Should be fulfilled": "Should be fulfilled"
    }


def test_locales_from_dir_skips_dirs_without_data(tmp_path):
    _write(tmp_path, "locales/en/data.yaml", "key: value")
    (tmp_path / "locales" / "de").mkdir()
    assert list(locales_from_dir(tmp_path)) == ["en"]


def test_locales_from_dir_bad_yaml(tmp_path):
    _write(tmp_path, "locales/en/data.yaml", "key: [unclosed")
    with pytest.raises(ValueError):
        locales_from_dir(tmp_path)


def test_locales_from_dir_non_mapping(tmp_path):
    _write(tmp_path, "locales/en/data.yaml", "- a\n- b\n")
    with pytest.raises(ValueError):
        locales_from_dir(tmp_path)


def test_locales_from_dir_missing(tmp_path):
    with pytest.raises(OSError):
        locales_from_dir(tmp_path)