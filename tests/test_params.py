"""Tests for build parameter parsing."""

from __future__ import annotations

import logging

import pytest

from utils.params import ParameterError, parse_params


class TestParseParams:
    def test_single_pair(self):
        assert parse_params("BRANCH=main") == {"BRANCH": "main"}

    def test_order_preserved_and_stripped(self):
        result = parse_params(" ENV = staging ,BRANCH=main,  DRY_RUN=true")
        assert list(result.items()) == [
            ("ENV", "staging"),
            ("BRANCH", "main"),
            ("DRY_RUN", "true"),
        ]

    def test_value_may_contain_equals(self):
        assert parse_params("OPTS=-Dfoo=bar") == {"OPTS": "-Dfoo=bar"}

    def test_empty_value_allowed(self):
        assert parse_params("TAG=") == {"TAG": ""}

    def test_trailing_comma_ignored(self):
        assert parse_params("A=1,") == {"A": "1"}

    def test_later_duplicate_wins(self):
        assert parse_params("A=1, A=2") == {"A": "2"}

    def test_missing_equals_rejected(self):
        with pytest.raises(ParameterError, match="'oops'"):
            parse_params("A=1, oops")

    def test_empty_key_rejected(self):
        with pytest.raises(ParameterError):
            parse_params("=value")

    def test_is_value_error(self):
        assert issubclass(ParameterError, ValueError)

    def test_parsed_mapping_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="utils.params"):
            parse_params("BRANCH=main")
        assert "parse_params: {'BRANCH': 'main'}" in caplog.text
