"""Tests for form data parsing — URL-encoded and multipart."""

import pytest

from routeguard.http.forms import FormData, UploadFile, parse_form_data
from routeguard.testing import encode_multipart

# ---------------------------------------------------------------------------
# FormData unit tests
# ---------------------------------------------------------------------------


class TestFormData:
    def test_getitem(self) -> None:
        form = FormData({"name": ["alice"]})
        assert form["name"] == "alice"

    def test_last_value_wins(self) -> None:
        form = FormData({"tag": ["a", "b"]})
        assert form["tag"] == "b"
        assert form.get_list("tag") == ["a", "b"]

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            FormData({})["missing"]

    def test_len_and_iter(self) -> None:
        form = FormData({"a": ["1"], "b": ["2"]})
        assert len(form) == 2
        assert set(form) == {"a", "b"}

    def test_files_default_empty(self) -> None:
        assert FormData({}).files == {}

    def test_to_dict_merges_files(self) -> None:
        upload = UploadFile("a.txt", "text/plain", 2, b"hi")
        form = FormData({"name": ["x", "y"]}, {"doc": upload})
        assert form.to_dict() == {"name": "y", "doc": upload}

    def test_repr(self) -> None:
        assert "alice" in repr(FormData({"name": ["alice"]}))


class TestUploadFile:
    async def test_read(self) -> None:
        upload = UploadFile("a.txt", "text/plain", 5, b"hello")
        assert await upload.read() == b"hello"

    def test_repr(self) -> None:
        upload = UploadFile("a.txt", "text/plain", 5, b"hello")
        assert repr(upload) == "UploadFile('a.txt', 'text/plain', 5 bytes)"


# ---------------------------------------------------------------------------
# parse_form_data
# ---------------------------------------------------------------------------


class TestParseUrlencoded:
    async def test_basic(self) -> None:
        form = await parse_form_data(
            b"name=mything&description=besthingever",
            "application/x-www-form-urlencoded",
        )
        assert form.to_dict() == {"name": "mything", "description": "besthingever"}

    async def test_charset_parameter_ignored(self) -> None:
        form = await parse_form_data(
            b"name=a", "application/x-www-form-urlencoded; charset=utf-8"
        )
        assert form["name"] == "a"

    async def test_plus_and_percent_decoding(self) -> None:
        form = await parse_form_data(b"q=my+thing%21", "application/x-www-form-urlencoded")
        assert form["q"] == "my thing!"

    async def test_blank_values_kept(self) -> None:
        form = await parse_form_data(b"empty=", "application/x-www-form-urlencoded")
        assert form["empty"] == ""


class TestParseMultipart:
    async def test_fields(self) -> None:
        body, content_type = encode_multipart({"name": "mything", "description": "best"})
        form = await parse_form_data(body, content_type)
        assert form.to_dict() == {"name": "mything", "description": "best"}

    async def test_file(self) -> None:
        body, content_type = encode_multipart(
            {"name": "mything"},
            {"doc": ("notes.txt", b"hello", "text/plain")},
        )
        form = await parse_form_data(body, content_type)
        upload = form.files["doc"]
        assert upload.filename == "notes.txt"
        assert upload.content_type == "text/plain"
        assert upload.size == 5
        assert await upload.read() == b"hello"
        assert "doc" not in form

    async def test_missing_boundary(self) -> None:
        with pytest.raises(ValueError, match="boundary"):
            await parse_form_data(b"", "multipart/form-data")


class TestParseUnsupported:
    async def test_json_is_not_a_form(self) -> None:
        with pytest.raises(ValueError, match="Unsupported form content type"):
            await parse_form_data(b"{}", "application/json")
