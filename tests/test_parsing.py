"""Tests for strict value parsing and .npy loading."""

import numpy as np
import pytest

from parsing import (
    ParseError,
    load_values_from_npy_file,
    parse_fraction_text,
    parse_value,
    parse_values,
)


class TestParseValue:
    @pytest.mark.parametrize("text,expected", [
        ("0.5", 0.5),
        ("-12.25", -12.25),
        ("3", 3.0),
        ("1e-9", 1e-9),
        ("2.5E+3", 2500.0),
        ("  0.047619 ", 0.047619),
    ])
    def test_accepts(self, text, expected):
        assert parse_value(text) == expected

    @pytest.mark.parametrize("text", [".5", "5.", "1e", "--1", "1.2.3", "1,2", "", "   "])
    def test_rejects(self, text):
        with pytest.raises(ParseError):
            parse_value(text)

    def test_illegal_characters_listed(self):
        with pytest.raises(ParseError, match=r"\['x'\]"):
            parse_value("0x10")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_value("pi")


class TestParseValues:
    def test_single_value(self):
        assert parse_values("0.1") == [0.1]

    def test_list(self):
        assert parse_values("[0.1,-2.5,1e-3]") == [0.1, -2.5, 1e-3]

    @pytest.mark.parametrize("text", ["[0.1,]", "[0.1", "[]", "[0.1]]", "[0.1 ,0.2]"])
    def test_malformed_lists(self, text):
        with pytest.raises(ParseError):
            parse_values(text)


class TestParseFractionText:
    def test_round_trip_with_str(self):
        assert parse_fraction_text("22/7") == (22, 7)
        assert parse_fraction_text(" -1/3 ") == (-1, 3)

    @pytest.mark.parametrize("text", ["13", "1/0", "1/-3", "1/x", "a/b"])
    def test_rejects(self, text):
        with pytest.raises(ParseError):
            parse_fraction_text(text)


class TestLoadNpy:
    def test_keeps_dtype(self, tmp_path):
        path = tmp_path / "vals.npy"
        np.save(path, np.array([[0.5, 0.25], [0.75, 0.125]], dtype=np.float32))
        vals = load_values_from_npy_file(str(path))
        assert len(vals) == 4
        assert all(isinstance(v, np.float32) for v in vals)
        assert [float(v) for v in vals] == [0.5, 0.25, 0.75, 0.125]

    def test_rejects_integer_arrays(self, tmp_path):
        path = tmp_path / "ints.npy"
        np.save(path, np.arange(4))
        with pytest.raises(TypeError):
            load_values_from_npy_file(str(path))

    def test_rejects_non_finite(self, tmp_path):
        path = tmp_path / "nan.npy"
        np.save(path, np.array([0.5, np.nan]))
        with pytest.raises(ValueError):
            load_values_from_npy_file(str(path))
