# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the import and export templates."""

import io
import logging

import pytest

from common_api.errors import InvalidArgumentError
from common_api.models import ExportedFile, MimeType
from common_api.operations.export_impl import export_impl
from common_api.operations.import_impl import check_format, import_impl

CSV = b"code,name\nIT,Italy\nFR,France\n"


class TestCheckFormat:
    """Tests for check_format."""

    @pytest.mark.parametrize("value", ["csv", "Excel", "JSON", MimeType.XML])
    def test_accepted(self, value):
        assert isinstance(check_format(value), MimeType)

    @pytest.mark.parametrize("value", ["pdf", None, 3])
    def test_rejected(self, value):
        with pytest.raises(InvalidArgumentError) as exc_info:
            check_format(value)
        assert exc_info.value.name == "format"


class TestImportImpl:
    """Tests for import_impl."""

    async def test_upload_path(self, ctx, recorder, tmp_path, caplog):
        caplog.set_level(logging.INFO)
        source = tmp_path / "countries.csv"
        source.write_bytes(CSV)
        recorder.reply(json=2)
        count = await import_impl(ctx, "/country/import/{format}", "CSV", source)
        assert count == 2
        request = recorder.last
        assert request.method == "POST"
        assert request.url.path == "/api/country/import/csv"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'filename="countries.csv"' in request.content
        assert CSV in request.content
        assert "Successfully import 2 Country(s) from CSV" in caplog.text

    async def test_upload_stream_default_filename(self, ctx, recorder):
        recorder.reply(json=1)
        await import_impl(ctx, "/country/import/{format}", MimeType.EXCEL, io.BytesIO(b"xlsx"))
        assert b'filename="country.xlsx"' in recorder.last.content

    async def test_parallel_sends_threads(self, ctx, recorder, tmp_path):
        source = tmp_path / "c.json"
        source.write_bytes(b"[]")
        recorder.reply(json=0)
        await import_impl(ctx, "/country/import/{format}", "json", source, parallel=True, threads=4)
        assert recorder.last.url.params["parallel"] == "true"
        assert recorder.last.url.params["threads"] == "4"

    async def test_threads_dropped_when_not_parallel(self, ctx, recorder, tmp_path):
        source = tmp_path / "c.json"
        source.write_bytes(b"[]")
        recorder.reply(json=0)
        await import_impl(ctx, "/country/import/{format}", "json", source, parallel=False, threads=4)
        assert recorder.last.url.params["parallel"] == "false"
        assert "threads" not in recorder.last.url.params

    def test_missing_file(self, ctx, tmp_path):
        with pytest.raises(InvalidArgumentError) as exc_info:
            import_impl(ctx, "/country/import/{format}", "csv", tmp_path / "absent.csv")
        assert exc_info.value.name == "file"

    def test_text_stream_rejected(self, ctx):
        with pytest.raises(InvalidArgumentError):
            import_impl(ctx, "/country/import/{format}", "csv", io.StringIO("code\nIT\n"))

    def test_threads_must_be_positive(self, ctx):
        with pytest.raises(InvalidArgumentError) as exc_info:
            import_impl(ctx, "/country/import/{format}", "csv", io.BytesIO(CSV), parallel=True, threads=0)
        assert exc_info.value.name == "threads"


class TestExportImpl:
    """Tests for export_impl."""

    async def test_export_returns_file(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(
            content=CSV,
            headers={"content-type": "text/csv", "content-disposition": "attachment; filename*=UTF-8''countries.csv"},
        )
        exported = await export_impl(
            ctx, "/country/export/{format}", "csv", {"level": 1}, {"sort_field": "code", "sort_order": "ASC"}
        )
        assert isinstance(exported, ExportedFile)
        assert exported.filename == "countries.csv"
        assert exported.content == CSV
        request = recorder.last
        assert request.url.path == "/api/country/export/csv"
        assert request.headers["accept"] == "text/csv"
        assert request.url.params["level"] == "1"
        assert request.url.params["sort_field"] == "code"
        assert "Successfully export the Countrys as CSV (29 bytes)" in caplog.text

    async def test_auto_download_saves_and_returns_none(self, ctx, recorder, tmp_path):
        recorder.reply(content=b"[]", headers={"content-type": "application/json"})
        result = await export_impl(ctx, "/country/export/{format}", MimeType.JSON, auto_download=True)
        assert result is None
        assert (tmp_path / "country.json").read_bytes() == b"[]"

    async def test_auto_download_explicit_dir(self, ctx, recorder, tmp_path):
        target = tmp_path / "exports"
        recorder.reply(content=b"<x/>", headers={"content-type": "application/xml"})
        await export_impl(ctx, "/country/export/{format}", "xml", auto_download=True, download_dir=target)
        assert (target / "country.xml").read_bytes() == b"<x/>"

    def test_bad_criteria(self, ctx):
        with pytest.raises(InvalidArgumentError):
            export_impl(ctx, "/country/export/{format}", "csv", {"colour": "red"})

    def test_auto_download_must_be_boolean(self, ctx):
        with pytest.raises(InvalidArgumentError):
            export_impl(ctx, "/country/export/{format}", "csv", auto_download="yes")
