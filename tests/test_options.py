"""Tests for request option normalization."""

import pytest

from schema_svc.views.options import (
    normalize_extensions,
    normalize_objects_flag,
    normalize_profiles,
    normalize_verbosity,
    translate_options,
    view_options,
)
from schema_svc.views.types import TranslateOptions, ViewOptions


class TestNormalizeExtensions:
    @pytest.mark.parametrize("raw", [None, ""])
    def test_absent_or_empty(self, raw):
        assert normalize_extensions(raw) == frozenset()

    def test_comma_list_collapses_duplicates(self):
        assert normalize_extensions("dev,linux,dev") == frozenset({"dev", "linux"})


class TestNormalizeProfiles:
    def test_absent_means_no_filtering(self):
        assert normalize_profiles(None) is None

    def test_empty_means_filter_to_nothing(self):
        result = normalize_profiles("")
        assert result is not None
        assert result == frozenset()

    def test_comma_list(self):
        assert normalize_profiles("host,cloud") == frozenset({"host", "cloud"})


class TestNormalizeVerbosity:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2", 2),
            ("0", 0),
            ("abc", 0),
            (None, 0),
            ("", 0),
            ("-5", 0),
            ("3x", 3),
            (" 3", 0),
            ("+2", 2),
        ],
    )
    def test_values(self, raw, expected):
        assert normalize_verbosity(raw) == expected

    def test_non_string(self):
        assert normalize_verbosity(2) == 0


class TestObjectsFlag:
    def test_only_one_enables(self):
        assert normalize_objects_flag("1") is True
        assert normalize_objects_flag("true") is False
        assert normalize_objects_flag(None) is False


class TestOptionBuilders:
    def test_view_options_defaults(self):
        assert view_options({}) == ViewOptions()

    def test_view_options(self):
        options = view_options({"objects": "1", "profiles": "", "extensions": "dev"})
        assert options.include_nested_objects is True
        assert options.profiles == frozenset()
        assert options.extension_filter == frozenset({"dev"})

    def test_translate_options(self):
        assert translate_options({"_mode": "2", "_spaces": "_"}) == TranslateOptions(spaces="_", verbose=2)
        assert translate_options({}) == TranslateOptions()
